"""FastAPI dependencies wiring request-scoped collaborators."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_db
from app.services.advisory_service import AdvisoryService
from app.services.growth_stage_service import GrowthStageService
from app.services.rule_store import RuleStore, SqlAlchemyRuleStore


async def get_rule_store(db: AsyncSession = Depends(get_db)) -> RuleStore:
	return SqlAlchemyRuleStore(db)


async def get_advisory_service(
	store: RuleStore = Depends(get_rule_store),
	settings: Settings = Depends(get_settings),
) -> AdvisoryService:
	return AdvisoryService(store, strict_ranges=settings.range_parse_strict)


async def get_growth_stage_service(store: RuleStore = Depends(get_rule_store)) -> GrowthStageService:
	return GrowthStageService(store)
