"""Pydantic response schemas for crop reference listings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CropRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	name: str
	display_name: str
	base_temp_celsius: float
	cap_temp_celsius: float


class CropListRead(BaseModel):
	crops: list[CropRead] = Field(default_factory=list)


class GrowthStageRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	name: str
	stage_order: int


class CropGrowthStagesRead(BaseModel):
	crop: str
	growth_stages: list[GrowthStageRead] = Field(default_factory=list)
