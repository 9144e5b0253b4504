from __future__ import annotations

from types import SimpleNamespace

import pytest
import structlog
from httpx import AsyncClient

from app.services.advisory_service import AdvisoryService
from app.services.growth_stage_service import GrowthStageService


@pytest.mark.asyncio
async def test_recommendation_endpoint_returns_matched_rules(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={
			"crop": "maize",
			"growth_stage_order": 3,
			"variety_type": "Early",
			"precipitation": 2,
			"temperature": 24,
		},
	)

	assert response.status_code == 200
	body = response.json()
	assert body["crop"] == "maize"
	assert body["variety_type"] == "Early"
	assert body["recommendations"] == [
		{
			"parameter": "Precipitation",
			"condition": "low",
			"message": "Rainfall is low, irrigate if possible.",
		},
		{
			"parameter": "Temperature",
			"condition": "optimal",
			"message": "Temperatures are ideal.",
		},
	]
	assert body["summary"] == "Found 2 recommendation(s) based on weather conditions."


@pytest.mark.asyncio
async def test_recommendation_defaults_variety_type(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "maize", "growth_stage_order": 3, "humidity": 90},
	)

	assert response.status_code == 200
	body = response.json()
	assert body["variety_type"] == "Early"
	assert body["recommendations"][0]["parameter"] == "Relative Humidity"


@pytest.mark.asyncio
async def test_recommendation_without_matches_is_not_an_error(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "maize", "growth_stage_order": 3},
	)

	assert response.status_code == 200
	body = response.json()
	assert body["recommendations"] == []
	assert body["summary"].startswith("No matching decision tree rules")


@pytest.mark.asyncio
async def test_recommendation_unknown_crop_maps_to_404(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "cassava", "growth_stage_order": 3, "precipitation": 1},
	)

	assert response.status_code == 404
	assert response.json()["detail"] == "Crop not found: cassava"


@pytest.mark.asyncio
async def test_recommendation_unknown_stage_maps_to_404(
	client: AsyncClient,
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	async def fake_evaluate(self: AdvisoryService, *_args: object) -> list[object]:
		raise LookupError("Growth stage 5 not found for maize")

	monkeypatch.setattr(AdvisoryService, "evaluate", fake_evaluate)

	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "maize", "growth_stage_order": 5},
	)

	assert response.status_code == 404
	assert "Growth stage 5" in response.json()["detail"]


@pytest.mark.asyncio
async def test_recommendation_unexpected_failure_maps_to_500(
	client: AsyncClient,
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	async def fake_evaluate(self: AdvisoryService, *_args: object) -> list[object]:
		raise RuntimeError("connection reset")

	monkeypatch.setattr(AdvisoryService, "evaluate", fake_evaluate)

	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "maize", "growth_stage_order": 3},
	)

	assert response.status_code == 500
	assert response.json()["detail"] == "Failed to evaluate decision tree"


@pytest.mark.asyncio
@pytest.mark.parametrize("order", [0, 7])
async def test_recommendation_validates_stage_order(client: AsyncClient, order: int) -> None:
	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "maize", "growth_stage_order": order},
	)
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_growth_stage_endpoint(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/growth-stage",
		json={"crop": "maize", "variety_type": "Early", "accumulated_gdd": 301},
	)

	assert response.status_code == 200
	assert response.json() == {
		"crop": "maize",
		"variety_type": "Early",
		"accumulated_gdd": 301.0,
		"growth_stage": "Establishment",
		"growth_stage_order": 2,
	}


@pytest.mark.asyncio
async def test_growth_stage_endpoint_fallback(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/growth-stage",
		json={"crop": "maize", "variety_type": "Mid", "accumulated_gdd": 4000},
	)

	assert response.status_code == 200
	assert response.json()["growth_stage_order"] == 6


@pytest.mark.asyncio
async def test_growth_stage_unknown_crop_maps_to_404(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/growth-stage",
		json={"crop": "cassava", "variety_type": "Late", "accumulated_gdd": 100},
	)

	assert response.status_code == 404
	assert "cassava Late" in response.json()["detail"]


@pytest.mark.asyncio
async def test_growth_stage_rejects_unknown_variety(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advisories/growth-stage",
		json={"crop": "maize", "variety_type": "Ultra", "accumulated_gdd": 100},
	)
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_growth_stage_uses_service_result(
	client: AsyncClient,
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	async def fake_resolve(self: GrowthStageService, *_args: object) -> object:
		return SimpleNamespace(name="Tasseling", stage_order=4)

	monkeypatch.setattr(GrowthStageService, "resolve", fake_resolve)

	response = await client.post(
		"/api/v1/advisories/growth-stage",
		json={"crop": "maize", "variety_type": "Early", "accumulated_gdd": 1200},
	)

	assert response.status_code == 200
	assert response.json()["growth_stage"] == "Tasseling"


@pytest.mark.asyncio
async def test_recommendation_binds_request_context_for_service_logs(
	client: AsyncClient,
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	seen: dict[str, object] = {}

	async def fake_evaluate(self: AdvisoryService, *_args: object) -> list[object]:
		seen.update(structlog.contextvars.get_contextvars())
		return []

	monkeypatch.setattr(AdvisoryService, "evaluate", fake_evaluate)

	response = await client.post(
		"/api/v1/advisories/recommendation",
		json={"crop": "maize", "growth_stage_order": 3},
		headers={"x-request-id": "advisory-context"},
	)

	assert response.status_code == 200
	assert seen["request_id"] == "advisory-context"
	assert seen["crop"] == "maize"
	assert seen["growth_stage_order"] == 3
	assert seen["variety_type"] == "Early"


@pytest.mark.asyncio
async def test_growth_stage_binds_request_context_for_service_logs(
	client: AsyncClient,
	monkeypatch: pytest.MonkeyPatch,
) -> None:
	seen: dict[str, object] = {}

	async def fake_resolve(self: GrowthStageService, *_args: object) -> object:
		seen.update(structlog.contextvars.get_contextvars())
		return SimpleNamespace(name="Flowering", stage_order=4)

	monkeypatch.setattr(GrowthStageService, "resolve", fake_resolve)

	response = await client.post(
		"/api/v1/advisories/growth-stage",
		json={"crop": "maize", "variety_type": "Mid", "accumulated_gdd": 1500},
	)

	assert response.status_code == 200
	assert seen["crop"] == "maize"
	assert seen["variety_type"] == "Mid"
	assert seen["accumulated_gdd"] == 1500.0
