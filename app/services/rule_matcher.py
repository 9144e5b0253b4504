"""Threshold matching for decision-tree rules.

``low`` and ``high`` compare strictly, ``optimal`` is inclusive at both ends,
so a reading sitting exactly on a band's lower bound is optimal, never low.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from app.models.enums import ConditionEnum
from app.services.range_parser import ParsedRange, RangeShape, parse_range

# Upper edge of an optimal band authored with a single bound: [a, a + slack].
OPTIMAL_BAND_SLACK = 10.0


class RuleLike(Protocol):
	condition_type: ConditionEnum
	units: str
	range_min: str | None
	range_max: str | None


def is_low(value: float, parsed: ParsedRange) -> bool:
	if parsed.shape == RangeShape.band:
		# the band's upper bound plays no part in "low"
		return value < parsed.lower
	if parsed.shape == RangeShape.below:
		return value < parsed.threshold
	return False


def is_optimal(value: float, parsed: ParsedRange) -> bool:
	if parsed.shape != RangeShape.band:
		return False
	lower = parsed.lower
	upper = parsed.upper if parsed.upper is not None else lower + OPTIMAL_BAND_SLACK
	return lower <= value <= upper


def is_high(value: float, parsed: ParsedRange) -> bool:
	if parsed.shape in (RangeShape.above, RangeShape.at_least):
		return value > parsed.threshold
	if parsed.shape == RangeShape.band:
		# malformed "a-b-c" ranges compare against the final segment
		return value > parsed.last
	return False


_CONDITION_CHECKS: dict[ConditionEnum, Callable[[float, ParsedRange], bool]] = {
	ConditionEnum.low: is_low,
	ConditionEnum.optimal: is_optimal,
	ConditionEnum.high: is_high,
}


def matches(rule: RuleLike, value: float, *, strict: bool = False) -> bool:
	"""Return whether ``value`` satisfies ``rule``.

	A rule without a range expression never matches.  In strict mode a
	malformed range raises :class:`~app.services.range_parser.MalformedRangeError`.
	"""
	parsed = parse_range(rule.range_min, rule.units, rule.range_max, strict=strict)
	if parsed.shape == RangeShape.empty:
		return False
	check = _CONDITION_CHECKS[ConditionEnum(rule.condition_type)]
	return check(value, parsed)
