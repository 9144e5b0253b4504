"""PostgreSQL-backed enum types for all ORM models.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.  Member
*values* are the labels used by the decision-tree workbooks ("Relative
Humidity", "P/PET", ...) and are what the database stores.
"""

from enum import StrEnum


class ParameterEnum(StrEnum):
    """Weather parameter a decision rule is keyed on."""

    p_pet = "P/PET"
    precipitation = "Precipitation"
    relative_humidity = "Relative Humidity"
    temperature = "Temperature"


class ConditionEnum(StrEnum):
    """Which side of the agronomic threshold a rule detects."""

    high = "high"
    low = "low"
    optimal = "optimal"


class VarietyTypeEnum(StrEnum):
    """Maturity class of a cultivar; selects its GDD-to-stage bands."""

    early = "Early"
    mid = "Mid"
    late = "Late"


def enum_values(enum_cls: type[StrEnum]) -> list[str]:
    """``values_callable`` for SQLAlchemy ``Enum`` columns (persist values, not names)."""
    return [member.value for member in enum_cls]
