"""Addressable stores — O(1) date → slot mapping for regular series.

Each interval family lays its values out in a numpy array whose row is the
offset of a coarse calendar unit from the period start and whose column is
the position of the date within that unit:

=======  ==========================  ===============
family   row                         column
=======  ==========================  ===============
YEAR     year offset                 (1-D array)
MONTH    year offset                 month - 1
DAY      absolute-month offset       day - 1
HOUR     day offset                  hour
MINUTE   hour offset                 minute
=======  ==========================  ===============

Positions are computed from period ordinals, never by scanning.  Cells that
do not correspond to a calendar date (e.g. Feb 30 in a DAY store) are
allocated but can never be addressed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from tscore.time import IntervalBase


@dataclass(frozen=True)
class DataPosition:
    """Resolved slot of a timestamp inside a store."""

    row: int
    column: Optional[int] = None

    @property
    def index(self) -> tuple[int, ...]:
        if self.column is None:
            return (self.row,)
        return (self.row, self.column)


class AddressableStore(ABC):
    """Value (and lazily, flag) array spanning ``[date1, date2]`` inclusive.

    Parameters
    ----------
    date1, date2 : pd.Period
        Period bounds, already at the store's precision.
    fill : float
        Initial value of every slot.
    """

    base: IntervalBase
    columns: Optional[int] = None

    def __init__(self, date1: pd.Period, date2: pd.Period, fill: float) -> None:
        self._date1 = date1
        self._date2 = date2
        self._values = np.full(self.shape, fill, dtype=float)
        self._flags: Optional[np.ndarray] = None

    # -- layout ------------------------------------------------------------

    @abstractmethod
    def _row(self, ts: pd.Period) -> int: ...

    def _column(self, ts: pd.Period) -> Optional[int]:
        return None

    @property
    def shape(self) -> tuple[int, ...]:
        n_rows = self._row(self._date2) + 1
        if self.columns is None:
            return (n_rows,)
        return (n_rows, self.columns)

    # -- public API --------------------------------------------------------

    def resolve(self, ts: pd.Period) -> Optional[DataPosition]:
        """Return the slot for *ts*, or ``None`` when outside the period."""
        if ts < self._date1 or ts > self._date2:
            return None
        return DataPosition(self._row(ts), self._column(ts))

    def get(self, pos: DataPosition) -> float:
        return float(self._values[pos.index])

    def set(self, pos: DataPosition, value: float) -> None:
        self._values[pos.index] = value

    @property
    def has_flags(self) -> bool:
        return self._flags is not None

    def get_flag(self, pos: DataPosition) -> str:
        if self._flags is None:
            return ""
        return self._flags[pos.index]

    def set_flag(self, pos: DataPosition, flag: str) -> None:
        if self._flags is None:
            self._flags = np.full(self.shape, "", dtype=object)
        self._flags[pos.index] = flag


class YearStore(AddressableStore):
    base = IntervalBase.YEAR

    def _row(self, ts: pd.Period) -> int:
        return ts.year - self._date1.year


class MonthStore(AddressableStore):
    base = IntervalBase.MONTH
    columns = 12

    def _row(self, ts: pd.Period) -> int:
        return ts.year - self._date1.year

    def _column(self, ts: pd.Period) -> int:
        return ts.month - 1


class DayStore(AddressableStore):
    base = IntervalBase.DAY
    columns = 31

    def _row(self, ts: pd.Period) -> int:
        return ts.asfreq("M").ordinal - self._date1.asfreq("M").ordinal

    def _column(self, ts: pd.Period) -> int:
        return ts.day - 1


class HourStore(AddressableStore):
    base = IntervalBase.HOUR
    columns = 24

    def _row(self, ts: pd.Period) -> int:
        return ts.asfreq("D").ordinal - self._date1.asfreq("D").ordinal

    def _column(self, ts: pd.Period) -> int:
        return ts.hour


class MinuteStore(AddressableStore):
    base = IntervalBase.MINUTE
    columns = 60

    def _row(self, ts: pd.Period) -> int:
        return ts.asfreq("h").ordinal - self._date1.asfreq("h").ordinal

    def _column(self, ts: pd.Period) -> int:
        return ts.minute


# -- registry ----------------------------------------------------------------

_STORES: dict[IntervalBase, type[AddressableStore]] = {}


def register_store(store_cls: type[AddressableStore]) -> None:
    """Register a store class for its interval family."""
    _STORES[store_cls.base] = store_cls


def store_for(base: IntervalBase) -> Optional[type[AddressableStore]]:
    """Return the store class for *base*, or ``None`` if unsupported."""
    return _STORES.get(base)


for _cls in (YearStore, MonthStore, DayStore, HourStore, MinuteStore):
    register_store(_cls)
