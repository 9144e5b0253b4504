"""Decision-tree advisory routes — recommendations and growth stage lookup."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from app.config import Settings, get_settings
from app.dependencies import get_advisory_service, get_growth_stage_service
from app.schemas.advisory import (
	GrowthStageRequest,
	GrowthStageResponse,
	RecommendationRequest,
	RecommendationResponse,
)
from app.services.advisory_service import AdvisoryService
from app.services.growth_stage_service import GrowthStageService

router = APIRouter(prefix="/advisories", tags=["advisories"])

NO_MATCH_SUMMARY = "No matching decision tree rules found for the provided weather conditions."


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Failed to evaluate decision tree",
	)


@router.post("/recommendation", response_model=RecommendationResponse)
async def get_crop_recommendation(
	payload: RecommendationRequest,
	service: AdvisoryService = Depends(get_advisory_service),
	settings: Settings = Depends(get_settings),
) -> RecommendationResponse:
	variety_type = payload.variety_type or settings.default_variety_type
	structlog.contextvars.bind_contextvars(
		crop=payload.crop,
		growth_stage_order=payload.growth_stage_order,
		variety_type=str(variety_type),
	)
	try:
		advisories = await service.evaluate(
			payload.crop,
			payload.growth_stage_order,
			variety_type,
			payload.readings(),
		)
	except Exception as exc:
		raise _map_error(exc) from exc

	summary = (
		f"Found {len(advisories)} recommendation(s) based on weather conditions."
		if advisories
		else NO_MATCH_SUMMARY
	)
	return RecommendationResponse(
		crop=payload.crop,
		growth_stage_order=payload.growth_stage_order,
		variety_type=variety_type,
		recommendations=advisories,
		summary=summary,
	)


@router.post("/growth-stage", response_model=GrowthStageResponse)
async def get_growth_stage(
	payload: GrowthStageRequest,
	service: GrowthStageService = Depends(get_growth_stage_service),
) -> GrowthStageResponse:
	structlog.contextvars.bind_contextvars(
		crop=payload.crop,
		variety_type=str(payload.variety_type),
		accumulated_gdd=payload.accumulated_gdd,
	)
	try:
		stage = await service.resolve(payload.crop, payload.variety_type, payload.accumulated_gdd)
	except Exception as exc:
		raise _map_error(exc) from exc

	if stage is None:
		raise HTTPException(
			status_code=status.HTTP_404_NOT_FOUND,
			detail=(
				f"Could not determine growth stage for {payload.crop} "
				f"{payload.variety_type} with {payload.accumulated_gdd} GDD"
			),
		)
	return GrowthStageResponse(
		crop=payload.crop,
		variety_type=payload.variety_type,
		accumulated_gdd=payload.accumulated_gdd,
		growth_stage=stage.name,
		growth_stage_order=stage.stage_order,
	)
