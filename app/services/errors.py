"""Service-level exceptions surfaced to the routing layer."""

from __future__ import annotations


class ReferenceDataNotFoundError(LookupError):
	"""A crop or growth stage named by the caller has no reference row."""


class CropNotFoundError(ReferenceDataNotFoundError):
	def __init__(self, crop_name: str):
		super().__init__(f"Crop not found: {crop_name}")
		self.crop_name = crop_name


class GrowthStageNotFoundError(ReferenceDataNotFoundError):
	def __init__(self, crop_name: str, stage_order: int):
		super().__init__(f"Growth stage {stage_order} not found for {crop_name}")
		self.crop_name = crop_name
		self.stage_order = stage_order
