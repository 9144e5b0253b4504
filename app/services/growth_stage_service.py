"""Growth stage resolution from accumulated Growing Degree Days."""

from __future__ import annotations

import structlog

from app.models.crops import GrowthStage
from app.models.enums import VarietyTypeEnum
from app.services.rule_store import RuleStore

logger = structlog.get_logger("advisory.growth_stage")


class GrowthStageService:
	"""Maps accumulated GDD + variety type to the crop's current growth stage."""

	def __init__(self, store: RuleStore):
		self.store = store

	async def resolve(
		self,
		crop_name: str,
		variety_type: VarietyTypeEnum,
		accumulated_gdd: float,
	) -> GrowthStage | None:
		"""Return the most advanced stage whose band contains ``accumulated_gdd``.

		Bands are inclusive on both ends.  When no band covers the value the
		crop is assumed fully mature and its highest-order stage is returned.
		``None`` means the crop is unknown.
		"""
		crop = await self.store.find_crop(crop_name)
		if crop is None:
			return None

		bands = await self.store.list_gdd_bands(crop.id, variety_type)
		covering = [band for band in bands if band.gdd_min <= accumulated_gdd <= band.gdd_max]
		if covering:
			best = max(covering, key=lambda band: band.growth_stage.stage_order)
			return best.growth_stage

		stages = await self.store.list_stages_by_order_desc(crop.id)
		if not stages:
			return None

		logger.info(
			"growth_stage_fallback",
			crop=crop.name,
			variety_type=str(variety_type),
			accumulated_gdd=accumulated_gdd,
			band_count=len(bands),
			stage_order=stages[0].stage_order,
		)
		return stages[0]
