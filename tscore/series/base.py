"""Series — the date-indexed container shared by regular and irregular data."""

from __future__ import annotations

import enum
import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd

from tscore.series.sample import Sample
from tscore.time import Interval, IntervalBase, TimestampLike, to_timestamp

if TYPE_CHECKING:
    from tscore.iteration.base import SeriesIterator
    from tscore.stats.limits import SeriesLimits

log = logging.getLogger(__name__)

DEFAULT_MISSING = -999.0

# Half-width of the band around the sentinel that still counts as missing
_MISSING_TOLERANCE = 0.001


class AllocationStatus(enum.Enum):
    """Outcome of :meth:`Series.allocate_data_space`."""

    OK = 0
    DATES_UNSET = 1
    INVALID_PERIOD = 2
    UNSUPPORTED_INTERVAL = 3

    def __bool__(self) -> bool:
        return self is AllocationStatus.OK


class Series(ABC):
    """Abstract time series over the inclusive period ``[date1, date2]``.

    Parameters
    ----------
    interval : Interval
        Data interval; irregular series use ``IntervalBase.IRREGULAR``.
    precision : IntervalBase, optional
        Timestamp precision.  Regular series always use the interval base;
        irregular series default to ``DAY``.
    missing : float
        Sentinel stored for "no observation".  NaN is always missing too.
    description, units : str
        Free-text metadata; units are carried, never converted.
    """

    def __init__(
        self,
        interval: Interval,
        *,
        precision: Optional[IntervalBase] = None,
        missing: float = DEFAULT_MISSING,
        description: str = "",
        units: str = "",
    ) -> None:
        self._interval = interval
        if interval.is_regular:
            self._precision = interval.base
        else:
            self._precision = precision or IntervalBase.DAY
        self._date1: Optional[pd.Period] = None
        self._date2: Optional[pd.Period] = None
        self._missing = DEFAULT_MISSING
        self._missing_lo = DEFAULT_MISSING
        self._missing_hi = DEFAULT_MISSING
        self.set_missing(missing)
        self.description = description
        self.units = units
        self.dirty = True
        self._limits: Optional[SeriesLimits] = None
        self._genesis: list[str] = []

    # -- metadata ----------------------------------------------------------

    @property
    def interval(self) -> Interval:
        return self._interval

    @property
    def precision(self) -> IntervalBase:
        return self._precision

    @property
    def date1(self) -> Optional[pd.Period]:
        return self._date1

    @date1.setter
    def date1(self, value: Optional[TimestampLike]) -> None:
        self._date1 = None if value is None else self.timestamp(value)

    @property
    def date2(self) -> Optional[pd.Period]:
        return self._date2

    @date2.setter
    def date2(self, value: Optional[TimestampLike]) -> None:
        self._date2 = None if value is None else self.timestamp(value)

    def timestamp(self, value: TimestampLike) -> pd.Period:
        """Coerce *value* to this series' precision."""
        return to_timestamp(value, self._precision)

    @property
    def genesis(self) -> list[str]:
        """History of operations applied to the series (copy)."""
        return list(self._genesis)

    def add_to_genesis(self, text: str) -> None:
        self._genesis.append(text)

    # -- missing data ------------------------------------------------------

    @property
    def missing(self) -> float:
        return self._missing

    def set_missing(self, missing: float) -> None:
        """Set the sentinel; values within +/-0.001 of it count as missing."""
        self._missing = missing
        if math.isnan(missing):
            self._missing_lo = self._missing_hi = math.nan
        elif missing == np.finfo(float).max:
            self._missing_lo = missing - _MISSING_TOLERANCE
            self._missing_hi = missing
        else:
            self._missing_lo = missing - _MISSING_TOLERANCE
            self._missing_hi = missing + _MISSING_TOLERANCE

    def set_missing_range(self, lo: float, hi: float) -> None:
        """Treat every value in ``[lo, hi]`` as missing; the sentinel is the midpoint."""
        if math.isnan(lo) or math.isnan(hi):
            raise ValueError("Missing range bounds cannot be NaN")
        self._missing_lo, self._missing_hi = min(lo, hi), max(lo, hi)
        self._missing = (lo + hi) / 2.0

    def is_missing(self, value: Optional[float]) -> bool:
        if value is None or math.isnan(value):
            return True
        return self._missing_lo <= value <= self._missing_hi

    # -- statistics --------------------------------------------------------

    @property
    def limits(self) -> Optional[SeriesLimits]:
        """Summary computed by the last :meth:`refresh` (may be stale if dirty)."""
        return self._limits

    def refresh(self) -> SeriesLimits:
        """Recompute the limits summary and clear the dirty flag."""
        from tscore.stats.limits import compute_limits

        self._limits = compute_limits(self)
        self.dirty = False
        return self._limits

    # -- traversal ---------------------------------------------------------

    def iterator(
        self,
        start: Optional[TimestampLike] = None,
        end: Optional[TimestampLike] = None,
    ) -> SeriesIterator:
        """Return the iterator variant matching this series' interval."""
        from tscore.iteration import make_iterator

        return make_iterator(self, start, end)

    def data_period(
        self,
        start: Optional[TimestampLike] = None,
        end: Optional[TimestampLike] = None,
    ) -> Optional[tuple[pd.Period, pd.Period]]:
        """Bounds to iterate when walking ``[start, end]`` end to end.

        Defaults to the series period.  Returns ``None`` when either bound is
        unknown or there is nothing to visit.
        """
        lo = self._date1 if start is None else self.timestamp(start)
        hi = self._date2 if end is None else self.timestamp(end)
        if lo is None or hi is None:
            return None
        return lo, hi

    def to_series(self) -> pd.Series:
        """Export the full period as a ``pd.Series`` (missing values → NaN)."""
        dates: list[pd.Period] = []
        values: list[float] = []
        bounds = self.data_period()
        if bounds is not None:
            for sample in self.iterator(*bounds):
                dates.append(sample.date)
                values.append(np.nan if self.is_missing(sample.value) else sample.value)
        index = pd.PeriodIndex(dates, freq=self._precision.freq)
        return pd.Series(values, index=index, dtype=float, name=self.description or None)

    # -- data access (per subclass) ----------------------------------------

    @abstractmethod
    def allocate_data_space(self, fill: Optional[float] = None) -> AllocationStatus: ...

    @property
    @abstractmethod
    def data_size(self) -> int: ...

    def has_data(self) -> bool:
        return self.data_size > 0

    @abstractmethod
    def get_value(self, date: TimestampLike) -> float: ...

    @abstractmethod
    def get_sample(self, date: TimestampLike) -> Sample: ...

    @abstractmethod
    def set_value(
        self, date: TimestampLike, value: float, flag: Optional[str] = None,
    ) -> None: ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(interval={self._interval}, "
            f"period={self._date1}..{self._date2}, size={self.data_size})"
        )
