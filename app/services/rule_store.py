"""Read-only access to crop reference data (crops, stages, rules, GDD bands)."""

from __future__ import annotations

import uuid
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.crops import Crop, DecisionRule, GDDBand, GrowthStage
from app.models.enums import VarietyTypeEnum


class RuleStore(Protocol):
	async def find_crop(self, name: str) -> Crop | None: ...

	async def find_growth_stage(self, crop_id: uuid.UUID, stage_order: int) -> GrowthStage | None: ...

	async def list_rules(self, crop_id: uuid.UUID, stage_id: uuid.UUID) -> list[DecisionRule]: ...

	async def list_gdd_bands(self, crop_id: uuid.UUID, variety_type: VarietyTypeEnum) -> list[GDDBand]: ...

	async def list_stages_by_order_desc(self, crop_id: uuid.UUID) -> list[GrowthStage]: ...

	async def list_crops(self) -> list[Crop]: ...

	async def list_stages(self, crop_id: uuid.UUID) -> list[GrowthStage]: ...


class SqlAlchemyRuleStore:
	"""Rule store over a request-scoped async session."""

	def __init__(self, db: AsyncSession):
		self.db = db

	async def find_crop(self, name: str) -> Crop | None:
		row = await self.db.execute(select(Crop).where(Crop.name == name.strip().lower()))
		return row.scalar_one_or_none()

	async def find_growth_stage(self, crop_id: uuid.UUID, stage_order: int) -> GrowthStage | None:
		stmt = select(GrowthStage).where(
			GrowthStage.crop_id == crop_id,
			GrowthStage.stage_order == stage_order,
		)
		row = await self.db.execute(stmt)
		return row.scalar_one_or_none()

	async def list_rules(self, crop_id: uuid.UUID, stage_id: uuid.UUID) -> list[DecisionRule]:
		stmt = (
			select(DecisionRule)
			.where(DecisionRule.crop_id == crop_id, DecisionRule.growth_stage_id == stage_id)
			.order_by(DecisionRule.parameter, DecisionRule.condition_type)
		)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def list_gdd_bands(self, crop_id: uuid.UUID, variety_type: VarietyTypeEnum) -> list[GDDBand]:
		stmt = (
			select(GDDBand)
			.where(GDDBand.crop_id == crop_id, GDDBand.variety_type == variety_type)
			.options(selectinload(GDDBand.growth_stage))
		)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def list_stages_by_order_desc(self, crop_id: uuid.UUID) -> list[GrowthStage]:
		stmt = (
			select(GrowthStage)
			.where(GrowthStage.crop_id == crop_id)
			.order_by(GrowthStage.stage_order.desc())
		)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def list_crops(self) -> list[Crop]:
		rows = await self.db.execute(select(Crop).order_by(Crop.display_name))
		return list(rows.scalars().all())

	async def list_stages(self, crop_id: uuid.UUID) -> list[GrowthStage]:
		stmt = (
			select(GrowthStage)
			.where(GrowthStage.crop_id == crop_id)
			.order_by(GrowthStage.stage_order.asc())
		)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())
