"""Iterator contract and cursor state shared by both iterator variants."""

from __future__ import annotations

import copy
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterator, Optional

import pandas as pd

from tscore.series.sample import Sample
from tscore.time import TimestampLike

if TYPE_CHECKING:
    from tscore.series.base import Series


class IteratorError(ValueError):
    """Raised when an iterator cannot be built (no series or no period)."""


class IteratorState(enum.Enum):
    NOT_STARTED = "not_started"
    FORWARD_ACTIVE = "forward_active"
    FORWARD_DONE = "forward_done"
    BACKWARD_ACTIVE = "backward_active"
    BACKWARD_DONE = "backward_done"


@dataclass
class Cursor:
    """Mutable traversal state, owned by exactly one iterator.

    ``first_processed`` is set once forward traversal has begun (or backward
    traversal ran off the start); ``last_processed`` once backward traversal
    has begun (or forward traversal ran off the end).
    """

    date: pd.Period
    first_processed: bool = False
    last_processed: bool = False
    state: IteratorState = IteratorState.NOT_STARTED
    index: int = -1  # list position, irregular iterator only

    def snapshot(self) -> Cursor:
        return replace(self)


class SeriesIterator(ABC):
    """Bidirectional cursor over a series sub-period ``[date1, date2]``.

    Traversal primitives return a :class:`Sample` or ``None`` when there is
    nothing more to visit; they never raise.

    Parameters
    ----------
    series : Series
        Series to traverse.  Shared, never modified.
    start, end : timestamp-like, optional
        Sub-period bounds; default to the series period.

    Raises
    ------
    IteratorError
        If *series* is ``None`` or a bound is missing on both the call and
        the series.
    """

    def __init__(
        self,
        series: Series,
        start: Optional[TimestampLike] = None,
        end: Optional[TimestampLike] = None,
    ) -> None:
        if series is None:
            raise IteratorError("Null time series for iterator")
        if start is None and series.date1 is None:
            raise IteratorError("Null starting date/time for iterator")
        if end is None and series.date2 is None:
            raise IteratorError("Null ending date/time for iterator")

        self._series = series
        self._interval = series.interval
        self._date1 = series.date1 if start is None else series.timestamp(start)
        self._date2 = series.date2 if end is None else series.timestamp(end)
        self._cursor = Cursor(self._date1)
        self._sample: Optional[Sample] = None

    # -- state -------------------------------------------------------------

    @property
    def series(self) -> Series:
        return self._series

    @property
    def date1(self) -> pd.Period:
        return self._date1

    @property
    def date2(self) -> pd.Period:
        return self._date2

    @property
    def date(self) -> pd.Period:
        """Current cursor position."""
        return self._cursor.date

    @property
    def state(self) -> IteratorState:
        return self._cursor.state

    @property
    def first_processed(self) -> bool:
        return self._cursor.first_processed

    @property
    def last_processed(self) -> bool:
        return self._cursor.last_processed

    @property
    def sample(self) -> Optional[Sample]:
        """Sample returned by the most recent successful traversal call."""
        return self._sample

    def _emit(self, sample: Optional[Sample]) -> Optional[Sample]:
        if sample is not None:
            self._sample = sample
        return sample

    # -- copying -----------------------------------------------------------

    def copy(self) -> SeriesIterator:
        """Independent cursor and bounds over the same series."""
        return copy.copy(self)

    def __copy__(self) -> SeriesIterator:
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._cursor = self._cursor.snapshot()
        return clone

    # -- Python iteration --------------------------------------------------

    def __iter__(self) -> Iterator[Sample]:
        while (sample := self.next()) is not None:
            yield sample

    # -- sub-period --------------------------------------------------------

    def set_begin_time(self, date: TimestampLike) -> None:
        """Rebind the start; forward traversal restarts from *date*.

        ``last_processed`` is left as is.
        """
        self._date1 = self._series.timestamp(date)
        self._cursor.date = self._date1
        self._cursor.first_processed = False
        self._cursor.state = IteratorState.NOT_STARTED
        self._cursor.index = -1

    def set_end_time(self, date: TimestampLike) -> None:
        """Rebind the end; a forward-done iterator resumes after its last sample.

        ``first_processed`` is left as is.
        """
        self._date2 = self._series.timestamp(date)
        self._cursor.last_processed = False
        if self._cursor.state is IteratorState.FORWARD_DONE:
            self._unpark_forward()
            self._cursor.state = IteratorState.FORWARD_ACTIVE

    @abstractmethod
    def _unpark_forward(self) -> None:
        """Move the cursor from one past the end back onto the last sample."""

    # -- traversal (per variant) -------------------------------------------

    @abstractmethod
    def next(self) -> Optional[Sample]: ...

    @abstractmethod
    def previous(self) -> Optional[Sample]: ...

    @abstractmethod
    def has_next(self) -> bool: ...

    @abstractmethod
    def go_to(self, date: TimestampLike, reset_on_fail: bool = False) -> Optional[Sample]: ...

    @abstractmethod
    def go_to_nearest_next(
        self, date: TimestampLike, reset_on_fail: bool = False,
    ) -> Optional[Sample]: ...

    @abstractmethod
    def go_to_nearest_previous(
        self, date: TimestampLike, reset_on_fail: bool = False,
    ) -> Optional[Sample]: ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._date1}..{self._date2}, "
            f"at={self._cursor.date}, state={self._cursor.state.name})"
        )
