"""Shared pytest fixtures — in-memory rule store, maize reference data, async test client."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_rule_store
from app.main import app
from app.models.enums import ConditionEnum, ParameterEnum, VarietyTypeEnum

MAIZE_STAGES = [
	"Germination",
	"Establishment",
	"Vegetative",
	"Flowering",
	"Grain Fill",
	"Physiological Maturity",
]


class FakeRuleStore:
	"""In-memory stand-in for the SQLAlchemy rule store."""

	def __init__(self) -> None:
		self.crops: list[SimpleNamespace] = []
		self.stages: list[SimpleNamespace] = []
		self.rules: list[SimpleNamespace] = []
		self.bands: list[SimpleNamespace] = []
		self.calls: list[str] = []

	# ── builders ─────────────────────────────────────────────────────────
	def add_crop(self, name: str, base: float = 10.0, cap: float = 30.0) -> SimpleNamespace:
		crop = SimpleNamespace(
			id=uuid.uuid4(),
			name=name.lower(),
			display_name=name.capitalize(),
			base_temp_celsius=base,
			cap_temp_celsius=cap,
		)
		self.crops.append(crop)
		return crop

	def add_stage(self, crop: SimpleNamespace, order: int, name: str) -> SimpleNamespace:
		stage = SimpleNamespace(id=uuid.uuid4(), crop_id=crop.id, stage_order=order, name=name)
		self.stages.append(stage)
		return stage

	def add_rule(
		self,
		stage: SimpleNamespace,
		parameter: ParameterEnum,
		condition: ConditionEnum,
		range_min: str | None,
		message: str,
		*,
		units: str = "",
		range_max: str | None = None,
	) -> SimpleNamespace:
		rule = SimpleNamespace(
			id=uuid.uuid4(),
			crop_id=stage.crop_id,
			growth_stage_id=stage.id,
			parameter=parameter,
			condition_type=condition,
			units=units,
			range_min=range_min,
			range_max=range_max,
			message=message,
		)
		self.rules.append(rule)
		return rule

	def add_band(
		self,
		stage: SimpleNamespace,
		variety: VarietyTypeEnum,
		gdd_min: float,
		gdd_max: float,
	) -> SimpleNamespace:
		band = SimpleNamespace(
			id=uuid.uuid4(),
			crop_id=stage.crop_id,
			variety_type=variety,
			growth_stage_id=stage.id,
			growth_stage=stage,
			gdd_min=gdd_min,
			gdd_max=gdd_max,
		)
		self.bands.append(band)
		return band

	# ── RuleStore protocol ───────────────────────────────────────────────
	async def find_crop(self, name: str) -> SimpleNamespace | None:
		self.calls.append("find_crop")
		key = name.strip().lower()
		return next((crop for crop in self.crops if crop.name == key), None)

	async def find_growth_stage(self, crop_id: uuid.UUID, stage_order: int) -> SimpleNamespace | None:
		self.calls.append("find_growth_stage")
		return next(
			(s for s in self.stages if s.crop_id == crop_id and s.stage_order == stage_order),
			None,
		)

	async def list_rules(self, crop_id: uuid.UUID, stage_id: uuid.UUID) -> list[SimpleNamespace]:
		self.calls.append("list_rules")
		parameters = list(ParameterEnum)
		conditions = list(ConditionEnum)
		selected = [r for r in self.rules if r.crop_id == crop_id and r.growth_stage_id == stage_id]
		return sorted(
			selected,
			key=lambda r: (parameters.index(r.parameter), conditions.index(r.condition_type)),
		)

	async def list_gdd_bands(self, crop_id: uuid.UUID, variety_type: VarietyTypeEnum) -> list[SimpleNamespace]:
		self.calls.append("list_gdd_bands")
		return [b for b in self.bands if b.crop_id == crop_id and b.variety_type == variety_type]

	async def list_stages_by_order_desc(self, crop_id: uuid.UUID) -> list[SimpleNamespace]:
		self.calls.append("list_stages_by_order_desc")
		stages = [s for s in self.stages if s.crop_id == crop_id]
		return sorted(stages, key=lambda s: s.stage_order, reverse=True)

	async def list_crops(self) -> list[SimpleNamespace]:
		return sorted(self.crops, key=lambda c: c.display_name)

	async def list_stages(self, crop_id: uuid.UUID) -> list[SimpleNamespace]:
		stages = [s for s in self.stages if s.crop_id == crop_id]
		return sorted(stages, key=lambda s: s.stage_order)


@pytest.fixture
def empty_store() -> FakeRuleStore:
	return FakeRuleStore()


@pytest.fixture
def store_factory() -> Callable[[], FakeRuleStore]:
	return FakeRuleStore


@pytest.fixture
def maize_store() -> FakeRuleStore:
	"""Maize with six stages, a vegetative-stage decision tree and Early/Mid GDD bands."""
	store = FakeRuleStore()
	maize = store.add_crop("maize")
	stages = {
		order: store.add_stage(maize, order, name)
		for order, name in enumerate(MAIZE_STAGES, start=1)
	}
	vegetative = stages[3]

	store.add_rule(vegetative, ParameterEnum.precipitation, ConditionEnum.low, "<5", "Rainfall is low, irrigate if possible.", units="mm")
	store.add_rule(vegetative, ParameterEnum.precipitation, ConditionEnum.optimal, "5-25 mm", "Rainfall is adequate for vegetative growth.", units="mm")
	store.add_rule(vegetative, ParameterEnum.precipitation, ConditionEnum.high, "25+", "Heavy rain expected, check field drainage.", units="mm")
	store.add_rule(vegetative, ParameterEnum.temperature, ConditionEnum.low, "18-30Â°C", "Cool temperatures will slow growth.", units="°C")
	store.add_rule(vegetative, ParameterEnum.temperature, ConditionEnum.optimal, "18-30Â°C", "Temperatures are ideal.", units="°C")
	store.add_rule(vegetative, ParameterEnum.temperature, ConditionEnum.high, "18-30Â°C", "Heat stress risk, mulch to conserve moisture.", units="°C")
	store.add_rule(vegetative, ParameterEnum.relative_humidity, ConditionEnum.high, ">85%", "High humidity favours leaf blight, scout fields.", units="%")
	store.add_rule(vegetative, ParameterEnum.p_pet, ConditionEnum.low, "<0.5", "Moisture stress likely.")

	early_bands = [(0, 300), (301, 700), (701, 1100), (1101, 1500), (1501, 1900), (1901, 2300)]
	for order, (low, high) in enumerate(early_bands, start=1):
		store.add_band(stages[order], VarietyTypeEnum.early, low, high)
	store.add_band(stages[1], VarietyTypeEnum.mid, 0, 350)
	store.add_band(stages[2], VarietyTypeEnum.mid, 351, 800)
	return store


@pytest.fixture
async def client(maize_store: FakeRuleStore) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and the rule store replaced in memory."""

	async def override_rule_store() -> Any:
		return maize_store

	app.dependency_overrides[get_rule_store] = override_rule_store
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
