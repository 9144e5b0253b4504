"""Async SQLAlchemy engine, session factory and the ``get_db`` dependency."""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import get_settings

_settings = get_settings()

engine = create_async_engine(
    _settings.database_url,
    pool_size=_settings.db_pool_size,
    pool_recycle=_settings.db_pool_recycle_seconds,
    pool_pre_ping=True,
    connect_args={"timeout": _settings.db_connect_timeout_seconds},
)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request; reference data is read-only so nothing is committed."""
    async with async_session_factory() as session:
        yield session
