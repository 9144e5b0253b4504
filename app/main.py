"""FastAPI application entrypoint — lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import get_settings
from app.database import engine
from app.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from app.routes import advisories, crops

SERVICE_NAME = "decision-tree-advisory"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger("advisory")


async def _check_database() -> dict[str, Any]:
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        return {"ok": False, "message": str(exc)}
    return {"ok": True, "message": "ok"}


async def _run_readiness_checks(_app: FastAPI) -> dict[str, dict[str, Any]]:
    return {"database": await _check_database()}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the reference database is reachable

    Shutdown:
      1. Dispose SQLAlchemy engine
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "Decision-tree advisory service starting",
        extra={
            "log_level": settings.log_level,
            "range_parse_strict": settings.range_parse_strict,
        },
    )

    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        raise

    yield

    logger.info("Decision-tree advisory service shutting down")
    await engine.dispose()


app = FastAPI(
    title="Decision Tree Advisory API",
    description=(
        "Crop decision trees for agricultural recommendations — matches weather "
        "readings against per-stage agronomic thresholds and resolves growth "
        "stage from accumulated Growing Degree Days."
    ),
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["Content-Type", "mcp-session-id", "Authorization", "x-request-id"],
    expose_headers=["Mcp-Session-Id", "x-request-id"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Service descriptor & health ─────────────────────────────────────────────
@app.get("/", tags=["system"])
async def service_info() -> dict[str, Any]:
    return {
        "service": "Decision Tree Advisory Service",
        "version": SERVICE_VERSION,
        "description": app.description,
        "endpoints": {
            "health": "/health",
            "readiness": "/health/ready",
            "recommendation": "/api/v1/advisories/recommendation (POST)",
            "growth_stage": "/api/v1/advisories/growth-stage (POST)",
            "crops": "/api/v1/crops",
            "growth_stages": "/api/v1/crops/{crop}/growth-stages",
        },
    }


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@app.get("/health/ready", tags=["system"])
async def readiness_check() -> JSONResponse:
    checks = await _run_readiness_checks(app)
    healthy = all(check["ok"] for check in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "degraded", "checks": checks},
    )


# ── Router registration ────────────────────────────────────────────────────
app.include_router(advisories.router, prefix="/api/v1")
app.include_router(crops.router, prefix="/api/v1")
