"""Crop reference listing routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_rule_store
from app.schemas.crops import CropGrowthStagesRead, CropListRead, CropRead, GrowthStageRead
from app.services.errors import CropNotFoundError
from app.services.rule_store import RuleStore

router = APIRouter(prefix="/crops", tags=["crops"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Failed to read crop reference data",
	)


@router.get("", response_model=CropListRead)
async def list_crops(store: RuleStore = Depends(get_rule_store)) -> CropListRead:
	try:
		crops = await store.list_crops()
	except Exception as exc:
		raise _map_error(exc) from exc
	return CropListRead(crops=[CropRead.model_validate(crop) for crop in crops])


@router.get("/{crop}/growth-stages", response_model=CropGrowthStagesRead)
async def list_growth_stages(
	crop: str,
	store: RuleStore = Depends(get_rule_store),
) -> CropGrowthStagesRead:
	try:
		record = await store.find_crop(crop)
		if record is None:
			raise CropNotFoundError(crop)
		stages = await store.list_stages(record.id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return CropGrowthStagesRead(
		crop=crop,
		growth_stages=[GrowthStageRead.model_validate(stage) for stage in stages],
	)
