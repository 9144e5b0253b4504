"""Range expression parsing for decision-tree threshold rules.

Workbook ranges come in a handful of loose shapes, often with units glued on
and the odd encoding artifact (``"20Â°C"``).  Parsing is lenient by default:
a bound that does not read as a number becomes ``0.0`` and an unrecognised
shape becomes ``UNKNOWN``; nothing raises.  ``strict=True`` turns both cases
into :class:`MalformedRangeError`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

# Degree signs, the UTF-8-read-as-Latin-1 artifact "Â", Celsius, percent, millimetres.
_UNIT_CHARS = re.compile(r"[Â°ºC%m]")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class MalformedRangeError(ValueError):
	"""Raised in strict mode for a range expression that cannot be read."""


class RangeShape(StrEnum):
	band = "band"  # "a-b"
	below = "below"  # "<t"
	above = "above"  # ">t"
	at_least = "at_least"  # "t+"
	unknown = "unknown"
	empty = "empty"


@dataclass(frozen=True, slots=True)
class ParsedRange:
	shape: RangeShape
	bounds: tuple[float, ...] = ()

	@property
	def lower(self) -> float | None:
		return self.bounds[0] if self.bounds else None

	@property
	def upper(self) -> float | None:
		"""Second bound of a band, ``None`` for single-bound bands."""
		return self.bounds[1] if len(self.bounds) > 1 else None

	@property
	def last(self) -> float | None:
		return self.bounds[-1] if self.bounds else None

	@property
	def threshold(self) -> float | None:
		return self.lower


def best_effort_float(text: str) -> float:
	"""Read the leading number of ``text``; ``0.0`` when there is none.

	Mirrors a permissive ``parseFloat``: ``"12.5abc"`` -> 12.5, ``"abc"`` -> 0.0.
	"""
	match = _LEADING_NUMBER.match(text.strip())
	if match is None:
		return 0.0
	return float(match.group(0))


def strip_units(text: str, units: str | None = None) -> str:
	cleaned = text
	if units and units.strip():
		cleaned = cleaned.replace(units.strip(), "")
	return _UNIT_CHARS.sub("", cleaned).strip()


def _parse_bound(text: str, units: str | None, strict: bool) -> float:
	cleaned = strip_units(text, units)
	if strict and _LEADING_NUMBER.fullmatch(cleaned) is None:
		raise MalformedRangeError(f"Bound {text!r} is not numeric")
	return best_effort_float(cleaned)


def _is_bare_number(text: str, units: str | None) -> bool:
	return _LEADING_NUMBER.fullmatch(strip_units(text, units)) is not None


def parse_range(
	range_min: str | None,
	units: str | None = None,
	range_max: str | None = None,
	*,
	strict: bool = False,
) -> ParsedRange:
	"""Parse a rule's range columns into a :class:`ParsedRange`.

	Shapes are tried in order ``a-b``, ``<t``, ``>t``, ``t+``.  A bare number
	in ``range_min`` paired with a ``range_max`` forms a band; a bare number
	alone is a single-bound band.
	"""
	expr = (range_min or "").strip()
	if not expr:
		return ParsedRange(RangeShape.empty)

	second = (range_max or "").strip()
	if second and _is_bare_number(expr, units):
		expr = f"{expr}-{second}"

	if "-" in expr:
		# a blank segment ("15-", "-5") reads as 0 like any other non-numeric bound
		segments = [segment.strip() for segment in expr.split("-")]
		bounds = tuple(_parse_bound(segment, units, strict) for segment in segments)
		return ParsedRange(RangeShape.band, bounds)

	if "<" in expr:
		return ParsedRange(RangeShape.below, (_parse_bound(expr.replace("<", ""), units, strict),))

	if ">" in expr:
		return ParsedRange(RangeShape.above, (_parse_bound(expr.replace(">", ""), units, strict),))

	if "+" in expr:
		return ParsedRange(RangeShape.at_least, (_parse_bound(expr.replace("+", ""), units, strict),))

	if _is_bare_number(expr, units):
		return ParsedRange(RangeShape.band, (_parse_bound(expr, units, strict),))

	if strict:
		raise MalformedRangeError(f"Unrecognised range expression {expr!r}")
	return ParsedRange(RangeShape.unknown)
