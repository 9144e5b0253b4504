"""Crop reference tables — crops, growth stages, decision rules, GDD bands.

All four tables are agronomic reference data.  They are populated by the
decision-tree workbook import and are only ever *read* by the advisory
services:

    crops ──< growth_stages ──< decision_rules
        └──────────────< gdd_bands (per variety type) >───┘
"""

from __future__ import annotations

import uuid

from sqlalchemy import (
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from app.models.enums import (
    ConditionEnum,
    ParameterEnum,
    VarietyTypeEnum,
    enum_values,
)

# ═══════════════════════════════════════════════════════════════════════════
# Crop
# ═══════════════════════════════════════════════════════════════════════════


class Crop(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A crop with its heat-unit calibration constants.

    ``base_temp_celsius`` / ``cap_temp_celsius`` bound the daily temperature
    used for GDD accumulation.  Accumulation happens upstream; the constants
    are only surfaced to API clients here.
    """

    __tablename__ = "crops"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    base_temp_celsius: Mapped[float] = mapped_column(
        Float, nullable=False, default=10.0, server_default="10"
    )
    cap_temp_celsius: Mapped[float] = mapped_column(
        Float, nullable=False, default=30.0, server_default="30"
    )

    # ── Relationships ────────────────────────────────────────────────────
    growth_stages: Mapped[list[GrowthStage]] = relationship(
        back_populates="crop",
        cascade="all, delete-orphan",
        order_by="GrowthStage.stage_order",
    )

    @validates("name")
    def _normalize_name(self, _key: str, value: str) -> str:
        return value.strip().lower()

    def __repr__(self) -> str:
        return f"<Crop id={self.id} name={self.name!r}>"


# ═══════════════════════════════════════════════════════════════════════════
# GrowthStage
# ═══════════════════════════════════════════════════════════════════════════


class GrowthStage(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Phenological stage of a crop; ``stage_order`` 1 is the earliest."""

    __tablename__ = "growth_stages"
    __table_args__ = (
        UniqueConstraint("crop_id", "stage_order", name="uq_growth_stages_crop_order"),
    )

    crop_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("crops.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    stage_order: Mapped[int] = mapped_column(Integer, nullable=False)

    crop: Mapped[Crop] = relationship(back_populates="growth_stages")

    def __repr__(self) -> str:
        return (
            f"<GrowthStage id={self.id} crop={self.crop_id} "
            f"order={self.stage_order} name={self.name!r}>"
        )


# ═══════════════════════════════════════════════════════════════════════════
# DecisionRule
# ═══════════════════════════════════════════════════════════════════════════


class DecisionRule(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One threshold row of a crop decision tree.

    ``range_min`` holds the raw range expression as authored in the workbook
    (``"10-20"``, ``"<5"``, ``">30"``, ``"25+"``, units sometimes embedded);
    ``range_max`` is an optional second bound string.  ``message`` is shown
    to the farmer verbatim when the rule matches.
    """

    __tablename__ = "decision_rules"
    __table_args__ = (
        Index("ix_decision_rules_crop_stage", "crop_id", "growth_stage_id"),
    )

    crop_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("crops.id", ondelete="CASCADE"),
        nullable=False,
    )
    growth_stage_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("growth_stages.id", ondelete="CASCADE"),
        nullable=False,
    )
    parameter: Mapped[ParameterEnum] = mapped_column(
        Enum(
            ParameterEnum,
            name="parameter_type",
            create_constraint=False,
            native_enum=True,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    condition_type: Mapped[ConditionEnum] = mapped_column(
        Enum(
            ConditionEnum,
            name="condition_type",
            create_constraint=False,
            native_enum=True,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    units: Mapped[str] = mapped_column(String(50), nullable=False, default="", server_default="")
    range_min: Mapped[str] = mapped_column(String(100), nullable=False, default="", server_default="")
    range_max: Mapped[str | None] = mapped_column(String(100), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<DecisionRule id={self.id} parameter={self.parameter} "
            f"condition={self.condition_type} range={self.range_min!r}>"
        )


# ═══════════════════════════════════════════════════════════════════════════
# GDDBand
# ═══════════════════════════════════════════════════════════════════════════


class GDDBand(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Inclusive accumulated-GDD window covered by a stage for one variety type."""

    __tablename__ = "gdd_bands"
    __table_args__ = (
        UniqueConstraint(
            "crop_id",
            "variety_type",
            "growth_stage_id",
            name="uq_gdd_bands_crop_variety_stage",
        ),
    )

    crop_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("crops.id", ondelete="CASCADE"),
        nullable=False,
    )
    variety_type: Mapped[VarietyTypeEnum] = mapped_column(
        Enum(
            VarietyTypeEnum,
            name="variety_type",
            create_constraint=False,
            native_enum=True,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    growth_stage_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("growth_stages.id", ondelete="CASCADE"),
        nullable=False,
    )
    gdd_min: Mapped[float] = mapped_column(Float, nullable=False)
    gdd_max: Mapped[float] = mapped_column(Float, nullable=False)

    growth_stage: Mapped[GrowthStage] = relationship()

    def __repr__(self) -> str:
        return (
            f"<GDDBand id={self.id} variety={self.variety_type} "
            f"stage={self.growth_stage_id} range=[{self.gdd_min}, {self.gdd_max}]>"
        )
