"""decision_tree_reference_schema

Revision ID: 3f1c9a2e7b40
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates the four crop reference tables (crops, growth_stages,
decision_rules, gdd_bands) and their three PostgreSQL enum types.
Requires the uuid-ossp extension for ``uuid_generate_v4()``.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2e7b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# ── Enum type names (PostgreSQL CREATE TYPE) ────────────────────────────────
ENUM_PARAMETER_TYPE = postgresql.ENUM(
    "P/PET",
    "Precipitation",
    "Relative Humidity",
    "Temperature",
    name="parameter_type",
    create_type=False,
)
ENUM_CONDITION_TYPE = postgresql.ENUM(
    "high", "low", "optimal", name="condition_type", create_type=False
)
ENUM_VARIETY_TYPE = postgresql.ENUM(
    "Early", "Mid", "Late", name="variety_type", create_type=False
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ── 1. Create enum types ────────────────────────────────────────────
    ENUM_PARAMETER_TYPE.create(op.get_bind(), checkfirst=True)
    ENUM_CONDITION_TYPE.create(op.get_bind(), checkfirst=True)
    ENUM_VARIETY_TYPE.create(op.get_bind(), checkfirst=True)

    # ── 2. Reference tables ─────────────────────────────────────────────

    # crops
    op.create_table(
        "crops",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("base_temp_celsius", sa.Float(), server_default="10", nullable=False),
        sa.Column("cap_temp_celsius", sa.Float(), server_default="30", nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # growth_stages
    op.create_table(
        "growth_stages",
        _id_column(),
        sa.Column("crop_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("stage_order", sa.Integer(), nullable=False),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["crop_id"], ["crops.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("crop_id", "stage_order", name="uq_growth_stages_crop_order"),
    )

    # decision_rules
    op.create_table(
        "decision_rules",
        _id_column(),
        sa.Column("crop_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("growth_stage_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("parameter", ENUM_PARAMETER_TYPE, nullable=False),
        sa.Column("condition_type", ENUM_CONDITION_TYPE, nullable=False),
        sa.Column("units", sa.String(50), server_default="", nullable=False),
        sa.Column("range_min", sa.String(100), server_default="", nullable=False),
        sa.Column("range_max", sa.String(100), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["crop_id"], ["crops.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["growth_stage_id"], ["growth_stages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_decision_rules_crop_stage",
        "decision_rules",
        ["crop_id", "growth_stage_id"],
    )

    # gdd_bands
    op.create_table(
        "gdd_bands",
        _id_column(),
        sa.Column("crop_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("variety_type", ENUM_VARIETY_TYPE, nullable=False),
        sa.Column("growth_stage_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("gdd_min", sa.Float(), nullable=False),
        sa.Column("gdd_max", sa.Float(), nullable=False),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["crop_id"], ["crops.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["growth_stage_id"], ["growth_stages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "crop_id",
            "variety_type",
            "growth_stage_id",
            name="uq_gdd_bands_crop_variety_stage",
        ),
    )


def downgrade() -> None:
    # ── Drop tables in reverse dependency order ─────────────────────────
    op.drop_table("gdd_bands")
    op.drop_index("ix_decision_rules_crop_stage", table_name="decision_rules")
    op.drop_table("decision_rules")
    op.drop_table("growth_stages")
    op.drop_table("crops")

    # ── Drop enum types ─────────────────────────────────────────────────
    ENUM_VARIETY_TYPE.drop(op.get_bind(), checkfirst=True)
    ENUM_CONDITION_TYPE.drop(op.get_bind(), checkfirst=True)
    ENUM_PARAMETER_TYPE.drop(op.get_bind(), checkfirst=True)
