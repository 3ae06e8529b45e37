"""Interval descriptor — the fixed step of a regular series."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class IntervalBase(enum.Enum):
    """Base unit of a series interval.

    The value is the pandas period frequency used for timestamps of that
    precision.  ``IRREGULAR`` has no frequency of its own.
    """

    MINUTE = "min"
    HOUR = "h"
    DAY = "D"
    MONTH = "M"
    YEAR = "Y"
    IRREGULAR = ""

    @property
    def freq(self) -> str:
        if self is IntervalBase.IRREGULAR:
            raise ValueError("Irregular interval has no period frequency")
        return self.value


# Accepted spellings for Interval.parse (case-insensitive)
_BASE_NAMES: dict[str, IntervalBase] = {
    "min": IntervalBase.MINUTE,
    "minute": IntervalBase.MINUTE,
    "h": IntervalBase.HOUR,
    "hour": IntervalBase.HOUR,
    "d": IntervalBase.DAY,
    "day": IntervalBase.DAY,
    "m": IntervalBase.MONTH,
    "mon": IntervalBase.MONTH,
    "month": IntervalBase.MONTH,
    "y": IntervalBase.YEAR,
    "year": IntervalBase.YEAR,
    "irreg": IntervalBase.IRREGULAR,
    "irregular": IntervalBase.IRREGULAR,
}

_INTERVAL_RE = re.compile(r"^\s*(\d*)\s*([A-Za-z]+)\s*$")


@dataclass(frozen=True)
class Interval:
    """(base, multiplier) pair, e.g. ``Interval(IntervalBase.MONTH, 1)``."""

    base: IntervalBase
    mult: int = 1

    def __post_init__(self) -> None:
        if self.base is not IntervalBase.IRREGULAR and self.mult < 1:
            raise ValueError(f"Interval multiplier must be >= 1, got {self.mult}")

    @classmethod
    def parse(cls, text: str) -> Interval:
        """Build an interval from strings such as ``"Month"`` or ``"6Hour"``."""
        match = _INTERVAL_RE.match(text or "")
        if match is None:
            raise ValueError(f"Unrecognized interval '{text}'")
        mult_str, name = match.groups()
        base = _BASE_NAMES.get(name.lower())
        if base is None:
            raise ValueError(
                f"Unknown interval base '{name}'. "
                f"Known: {sorted(_BASE_NAMES)}"
            )
        if base is IntervalBase.IRREGULAR:
            if mult_str:
                raise ValueError("Irregular interval does not take a multiplier")
            return cls(base)
        return cls(base, int(mult_str) if mult_str else 1)

    @property
    def is_regular(self) -> bool:
        return self.base is not IntervalBase.IRREGULAR

    def __str__(self) -> str:
        if not self.is_regular:
            return "Irregular"
        return f"{self.mult}{self.base.name.capitalize()}"
