"""Irregular-interval series — a sorted list of samples with no fixed step."""

from __future__ import annotations

import bisect
import logging
from operator import attrgetter
from typing import Optional

import pandas as pd

from tscore.series.base import AllocationStatus, Series
from tscore.series.sample import Sample
from tscore.time import Interval, IntervalBase, TimestampLike

log = logging.getLogger(__name__)

_date_key = attrgetter("date")


class IrregularSeries(Series):
    """Observations at arbitrary timestamps, kept in ascending date order.

    Duplicate timestamps are allowed and keep their insertion order.  The
    period ``[date1, date2]`` grows to cover every inserted sample.
    """

    def __init__(self, precision: IntervalBase = IntervalBase.DAY, **kwargs) -> None:
        super().__init__(Interval(IntervalBase.IRREGULAR), precision=precision, **kwargs)
        self._samples: list[Sample] = []

    def allocate_data_space(self, fill: Optional[float] = None) -> AllocationStatus:
        # Nothing to size: samples are stored as they arrive.
        if self._date1 is None or self._date2 is None:
            log.warning("Dates have not been set for irregular series")
            return AllocationStatus.DATES_UNSET
        if self._date2 < self._date1:
            return AllocationStatus.INVALID_PERIOD
        return AllocationStatus.OK

    @property
    def data_size(self) -> int:
        return len(self._samples)

    @property
    def samples(self) -> list[Sample]:
        """The ordered sample list.  Shared with iterators; do not mutate."""
        return self._samples

    def data_period(
        self,
        start: Optional[TimestampLike] = None,
        end: Optional[TimestampLike] = None,
    ) -> Optional[tuple[pd.Period, pd.Period]]:
        """Dates of the first and last samples inside ``[start, end]``.

        The iterator only starts on a sample dated exactly at its bound, so
        whole-period walks are narrowed to samples that exist.
        """
        bounds = super().data_period(start, end)
        if bounds is None:
            return None
        lo, hi = bounds
        i = bisect.bisect_left(self._samples, lo, key=_date_key)
        j = bisect.bisect_right(self._samples, hi, key=_date_key) - 1
        if i > j:
            return None
        return self._samples[i].date, self._samples[j].date

    # -- lookup ------------------------------------------------------------

    def _find(self, ts: pd.Period) -> Optional[int]:
        i = bisect.bisect_left(self._samples, ts, key=_date_key)
        if i < len(self._samples) and self._samples[i].date == ts:
            return i
        return None

    def get_value(self, date: TimestampLike) -> float:
        i = self._find(self.timestamp(date))
        if i is None:
            return self._missing
        return self._samples[i].value

    def get_sample(self, date: TimestampLike) -> Sample:
        ts = self.timestamp(date)
        i = self._find(ts)
        if i is None:
            return Sample(ts, self._missing)
        return self._samples[i]

    # -- mutation ----------------------------------------------------------

    def set_value(
        self, date: TimestampLike, value: float, flag: Optional[str] = None,
    ) -> None:
        """Replace the first sample at *date*, or insert a new one in order."""
        ts = self.timestamp(date)
        i = self._find(ts)
        if i is not None:
            old = self._samples[i]
            self._samples[i] = Sample(ts, value, old.flag if flag is None else flag)
        else:
            bisect.insort_right(
                self._samples, Sample(ts, value, flag or ""), key=_date_key,
            )
            self._extend_period(ts)
        self.dirty = True

    def add_sample(self, date: TimestampLike, value: float, flag: str = "") -> None:
        """Insert a sample after any existing samples with the same date."""
        ts = self.timestamp(date)
        bisect.insort_right(self._samples, Sample(ts, value, flag), key=_date_key)
        self._extend_period(ts)
        self.dirty = True

    def _extend_period(self, ts: pd.Period) -> None:
        if self._date1 is None or ts < self._date1:
            self._date1 = ts
        if self._date2 is None or ts > self._date2:
            self._date2 = ts
