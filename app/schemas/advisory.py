"""Pydantic request/response schemas for advisory evaluation and growth stages."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.models.enums import ConditionEnum, ParameterEnum, VarietyTypeEnum


class WeatherReadings(BaseModel):
	"""Current weather; an unset field means the parameter was not measured."""

	precipitation: float | None = Field(default=None, description="Precipitation in mm (4-day total)")
	humidity: float | None = Field(default=None, description="Relative humidity % (4-day average)")
	temperature: float | None = Field(default=None, description="Temperature in °C (4-day average)")
	p_pet: float | None = Field(default=None, description="P/PET ratio (10-day total)")


class Advisory(BaseModel):
	parameter: ParameterEnum
	condition: ConditionEnum
	message: str


class RecommendationRequest(WeatherReadings):
	crop: str = Field(min_length=1, max_length=100)
	growth_stage_order: int = Field(ge=1, le=6)
	variety_type: VarietyTypeEnum | None = None

	def readings(self) -> WeatherReadings:
		return WeatherReadings(
			precipitation=self.precipitation,
			humidity=self.humidity,
			temperature=self.temperature,
			p_pet=self.p_pet,
		)


class RecommendationResponse(BaseModel):
	crop: str
	growth_stage_order: int
	variety_type: VarietyTypeEnum
	recommendations: list[Advisory] = Field(default_factory=list)
	summary: str


class GrowthStageRequest(BaseModel):
	crop: str = Field(min_length=1, max_length=100)
	variety_type: VarietyTypeEnum
	accumulated_gdd: float


class GrowthStageResponse(BaseModel):
	crop: str
	variety_type: VarietyTypeEnum
	accumulated_gdd: float
	growth_stage: str
	growth_stage_order: int
