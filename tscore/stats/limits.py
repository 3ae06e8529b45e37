"""Data limits — summary statistics gathered by walking a series once."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from tscore.series.base import Series
    from tscore.time import TimestampLike

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesLimits:
    """Immutable summary returned by :func:`compute_limits`.

    Value statistics are ``None`` when the period holds no non-missing data.
    """

    date1: Optional[pd.Period]
    date2: Optional[pd.Period]
    missing_count: int = 0
    non_missing_count: int = 0
    non_missing_date1: Optional[pd.Period] = None
    non_missing_date2: Optional[pd.Period] = None
    min_value: Optional[float] = None
    min_value_date: Optional[pd.Period] = None
    max_value: Optional[float] = None
    max_value_date: Optional[pd.Period] = None
    sum: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.non_missing_count > 0

    def to_dict(self) -> dict:
        return {
            "date1": _fmt(self.date1),
            "date2": _fmt(self.date2),
            "missing_count": self.missing_count,
            "non_missing_count": self.non_missing_count,
            "non_missing_date1": _fmt(self.non_missing_date1),
            "non_missing_date2": _fmt(self.non_missing_date2),
            "min_value": self.min_value,
            "min_value_date": _fmt(self.min_value_date),
            "max_value": self.max_value,
            "max_value_date": _fmt(self.max_value_date),
            "sum": self.sum,
            "mean": self.mean,
            "median": self.median,
            "std_dev": self.std_dev,
        }


def _fmt(ts: Optional[pd.Period]) -> Optional[str]:
    return None if ts is None else str(ts)


def compute_limits(
    series: Series,
    start: Optional[TimestampLike] = None,
    end: Optional[TimestampLike] = None,
    ignore_non_positive: bool = False,
) -> SeriesLimits:
    """Walk *series* over ``[start, end]`` and summarise its values.

    Parameters
    ----------
    series : Series
        Series to summarise.
    start, end : timestamp-like, optional
        Sub-period; defaults to the series period.
    ignore_non_positive : bool
        Count values ``<= 0`` as missing.

    Returns
    -------
    SeriesLimits
        Empty limits (all counts zero) when the series has no period or
        nothing to visit inside it.
    """
    date1 = series.date1 if start is None else series.timestamp(start)
    date2 = series.date2 if end is None else series.timestamp(end)
    bounds = series.data_period(date1, date2)
    if bounds is None:
        return SeriesLimits(date1=date1, date2=date2)

    it = series.iterator(*bounds)
    values: list[float] = []
    missing = 0
    min_value = max_value = None
    min_date = max_date = first_date = last_date = None

    for sample in it:
        value = sample.value
        if series.is_missing(value) or (ignore_non_positive and value <= 0):
            missing += 1
            continue
        values.append(value)
        if first_date is None:
            first_date = sample.date
        last_date = sample.date
        if min_value is None or value < min_value:
            min_value, min_date = value, sample.date
        if max_value is None or value > max_value:
            max_value, max_date = value, sample.date

    if not values:
        log.debug("No non-missing data in %s..%s", date1, date2)
        return SeriesLimits(date1=date1, date2=date2, missing_count=missing)

    arr = np.asarray(values, dtype=float)
    total = float(arr.sum())
    return SeriesLimits(
        date1=date1,
        date2=date2,
        missing_count=missing,
        non_missing_count=len(arr),
        non_missing_date1=first_date,
        non_missing_date2=last_date,
        min_value=min_value,
        min_value_date=min_date,
        max_value=max_value,
        max_value_date=max_date,
        sum=total,
        mean=total / len(arr),
        median=float(np.median(arr)),
        std_dev=float(arr.std(ddof=1)) if len(arr) > 1 else None,
    )
