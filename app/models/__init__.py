"""ORM model registry — importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from app.models import Crop, GrowthStage, DecisionRule, GDDBand
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# ── Crop reference ──────────────────────────────────────────────────────────
from app.models.crops import Crop, DecisionRule, GDDBand, GrowthStage

# ── Enums ───────────────────────────────────────────────────────────────────
from app.models.enums import ConditionEnum, ParameterEnum, VarietyTypeEnum

__all__ = [
    # Base & mixins
    "Base",
    # Enums
    "ConditionEnum",
    # Crop reference
    "Crop",
    "DecisionRule",
    "GDDBand",
    "GrowthStage",
    "ParameterEnum",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "VarietyTypeEnum",
]
