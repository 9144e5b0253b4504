"""Advisory evaluation — binds weather readings to decision-tree rules."""

from __future__ import annotations

import structlog

from app.models.enums import ParameterEnum, VarietyTypeEnum
from app.schemas.advisory import Advisory, WeatherReadings
from app.services import rule_matcher
from app.services.errors import CropNotFoundError, GrowthStageNotFoundError
from app.services.range_parser import MalformedRangeError
from app.services.rule_store import RuleStore

logger = structlog.get_logger("advisory.evaluation")

PARAMETER_FIELDS: dict[ParameterEnum, str] = {
	ParameterEnum.p_pet: "p_pet",
	ParameterEnum.precipitation: "precipitation",
	ParameterEnum.relative_humidity: "humidity",
	ParameterEnum.temperature: "temperature",
}


def reading_for(parameter: ParameterEnum, readings: WeatherReadings) -> float | None:
	return getattr(readings, PARAMETER_FIELDS[parameter])


class AdvisoryService:
	"""Evaluates a crop/stage decision tree against current weather."""

	def __init__(self, store: RuleStore, *, strict_ranges: bool = False):
		self.store = store
		self.strict_ranges = strict_ranges

	async def evaluate(
		self,
		crop_name: str,
		stage_order: int,
		variety_type: VarietyTypeEnum,
		readings: WeatherReadings,
	) -> list[Advisory]:
		"""Return the advisories whose thresholds the readings cross.

		Rules for parameters missing from ``readings`` are skipped.  An empty
		list means no threshold was crossed.  ``variety_type`` does not select
		rules; decision trees are shared across varieties.
		"""
		crop = await self.store.find_crop(crop_name)
		if crop is None:
			raise CropNotFoundError(crop_name)

		stage = await self.store.find_growth_stage(crop.id, stage_order)
		if stage is None:
			raise GrowthStageNotFoundError(crop_name, stage_order)

		rules = await self.store.list_rules(crop.id, stage.id)

		advisories: list[Advisory] = []
		for rule in rules:
			value = reading_for(ParameterEnum(rule.parameter), readings)
			if value is None:
				continue
			try:
				matched = rule_matcher.matches(rule, value, strict=self.strict_ranges)
			except MalformedRangeError as exc:
				logger.warning(
					"advisory_rule_skipped",
					rule_id=str(rule.id),
					parameter=str(rule.parameter),
					range_min=rule.range_min,
					error=str(exc),
				)
				continue
			if matched:
				advisories.append(
					Advisory(
						parameter=rule.parameter,
						condition=rule.condition_type,
						message=rule.message,
					)
				)

		logger.debug(
			"advisory_evaluated",
			crop=crop.name,
			stage_order=stage_order,
			variety_type=str(variety_type),
			rule_count=len(rules),
			matched_count=len(advisories),
		)
		return advisories
