"""Precision-aware timestamps built on :class:`pandas.Period`.

A timestamp's precision is its period frequency: a monthly series holds
``Period('2001-06', 'M')`` values, a daily one ``Period('2001-06-15', 'D')``.
Periods are immutable, so stepping always yields a new value and no two
holders can share a mutable date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

import pandas as pd

from .interval import Interval, IntervalBase

TimestampLike = Union[pd.Period, pd.Timestamp, datetime, date, str]


def to_timestamp(value: TimestampLike, precision: IntervalBase) -> pd.Period:
    """Return *value* as a period of the given *precision*.

    Coarsening truncates (a day becomes its month); refining takes the start
    of the period (a month becomes its first day).
    """
    freq = precision.freq
    if isinstance(value, pd.Period):
        return value.asfreq(freq, how="start")
    return pd.Period(value, freq=freq)


def add_intervals(ts: pd.Period, interval: Interval, n: int = 1) -> pd.Period:
    """Step *ts* by *n* intervals (negative *n* steps backward)."""
    return ts + n * interval.mult


def intervals_between(start: pd.Period, end: pd.Period, interval: Interval) -> int:
    """Inclusive number of interval steps from *start* to *end*.

    Returns 0 when *end* precedes *start*.
    """
    if end < start:
        return 0
    return (end.ordinal - start.ordinal) // interval.mult + 1
