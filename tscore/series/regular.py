"""Regular-interval series backed by an addressable store."""

from __future__ import annotations

import logging
from typing import Optional

from tscore.series.base import AllocationStatus, Series
from tscore.series.sample import Sample
from tscore.series.store import AddressableStore, DataPosition, store_for
from tscore.time import Interval, TimestampLike, add_intervals, intervals_between

log = logging.getLogger(__name__)


class RegularSeries(Series):
    """Fixed-step series (year, month, day, hour or minute).

    Values live in an :class:`AddressableStore` sized by
    :meth:`allocate_data_space`; until then every lookup returns the missing
    sentinel.  Only 1-multiplier intervals can be stored.
    """

    def __init__(self, interval: Interval, **kwargs) -> None:
        if not interval.is_regular:
            raise ValueError("RegularSeries requires a regular interval")
        super().__init__(interval, **kwargs)
        self._store: Optional[AddressableStore] = None
        self._data_size = 0

    # -- allocation --------------------------------------------------------

    def allocate_data_space(self, fill: Optional[float] = None) -> AllocationStatus:
        """Size the store to ``[date1, date2]`` and fill every slot.

        Returns a non-OK :class:`AllocationStatus` (never raises) when the
        dates are unset or reversed, or the interval cannot be stored.
        """
        if self._date1 is None or self._date2 is None:
            log.warning("Dates have not been set; cannot allocate data space")
            return AllocationStatus.DATES_UNSET
        if self._date2 < self._date1:
            log.warning("End %s precedes start %s; cannot allocate", self._date2, self._date1)
            return AllocationStatus.INVALID_PERIOD
        store_cls = store_for(self._interval.base)
        if store_cls is None or self._interval.mult != 1:
            log.warning(
                "Only 1-multiplier storage is supported, not %s", self._interval,
            )
            return AllocationStatus.UNSUPPORTED_INTERVAL

        self._store = store_cls(
            self._date1, self._date2, self._missing if fill is None else fill,
        )
        self._data_size = intervals_between(self._date1, self._date2, self._interval)
        self.dirty = True
        log.debug(
            "Allocated %s store %s for %s..%s (%d values)",
            self._interval, self._store.shape, self._date1, self._date2, self._data_size,
        )
        return AllocationStatus.OK

    def change_period(
        self, date1: TimestampLike, date2: TimestampLike,
    ) -> AllocationStatus:
        """Reallocate over a new period, keeping values where the periods overlap."""
        old_store = self._store
        old_date1, old_date2 = self._date1, self._date2
        self.date1 = date1
        self.date2 = date2

        status = self.allocate_data_space()
        if not status:
            self._date1, self._date2, self._store = old_date1, old_date2, old_store
            return status
        if old_store is None:
            return status

        lo = max(old_date1, self._date1)
        hi = min(old_date2, self._date2)
        ts = lo
        while ts <= hi:
            src = old_store.resolve(ts)
            dst = self._store.resolve(ts)
            self._store.set(dst, old_store.get(src))
            if old_store.has_flags:
                self._store.set_flag(dst, old_store.get_flag(src))
            ts = add_intervals(ts, self._interval)

        self.add_to_genesis(
            f"Changed period from {old_date1}..{old_date2} to {self._date1}..{self._date2}"
        )
        return status

    # -- addressing --------------------------------------------------------

    @property
    def data_size(self) -> int:
        return self._data_size

    def resolve(self, date: TimestampLike) -> Optional[DataPosition]:
        """Return the store slot for *date*, or ``None`` if unaddressable."""
        if self._store is None:
            return None
        return self._store.resolve(self.timestamp(date))

    def get_value(self, date: TimestampLike) -> float:
        pos = self.resolve(date)
        if pos is None:
            log.debug("%s not within period %s..%s", date, self._date1, self._date2)
            return self._missing
        return self._store.get(pos)

    def get_sample(self, date: TimestampLike) -> Sample:
        ts = self.timestamp(date)
        pos = None if self._store is None else self._store.resolve(ts)
        if pos is None:
            return Sample(ts, self._missing)
        return Sample(ts, self._store.get(pos), self._store.get_flag(pos))

    def set_value(
        self, date: TimestampLike, value: float, flag: Optional[str] = None,
    ) -> None:
        """Store *value* at *date*; out-of-period dates are ignored."""
        pos = self.resolve(date)
        if pos is None:
            log.debug(
                "Not setting %s: %s not within period %s..%s",
                value, date, self._date1, self._date2,
            )
            return
        self._store.set(pos, value)
        if flag is not None:
            self._store.set_flag(pos, flag)
        self.dirty = True
