"""Regular-interval iterator — arithmetic stepping plus positional search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import pandas as pd

from tscore.iteration.base import Cursor, IteratorError, IteratorState, SeriesIterator
from tscore.series.sample import Sample
from tscore.time import TimestampLike, add_intervals

if TYPE_CHECKING:
    from tscore.series.base import Series

log = logging.getLogger(__name__)

_ACTIVE = (IteratorState.FORWARD_ACTIVE, IteratorState.BACKWARD_ACTIVE)


class RegularIterator(SeriesIterator):
    """Steps a fixed-interval series one interval at a time.

    The first :meth:`next` returns the sample at ``date1`` without stepping;
    a :meth:`previous` issued before any :meth:`next` jumps straight to
    ``date2`` so pure backward traversal works.  Running off either end parks
    the cursor one interval outside the sub-period, from where the opposite
    direction can resume.
    """

    def __init__(
        self,
        series: Series,
        start: Optional[TimestampLike] = None,
        end: Optional[TimestampLike] = None,
    ) -> None:
        super().__init__(series, start, end)
        if not self._interval.is_regular:
            raise IteratorError("RegularIterator requires a regular-interval series")

    # -- stepping ----------------------------------------------------------

    def next(self) -> Optional[Sample]:
        if not self._series.has_data():
            return None
        c = self._cursor
        if c.state is IteratorState.FORWARD_DONE:
            return None

        if c.state is IteratorState.NOT_STARTED:
            c.first_processed = True
        else:
            c.date = add_intervals(c.date, self._interval)

        if c.date > self._date2:
            c.state = IteratorState.FORWARD_DONE
            c.last_processed = True
            log.debug("Have passed end date %s", self._date2)
            return None
        c.state = IteratorState.FORWARD_ACTIVE
        return self._emit(self._series.get_sample(c.date))

    def previous(self) -> Optional[Sample]:
        if not self._series.has_data():
            return None
        c = self._cursor
        if c.state is IteratorState.BACKWARD_DONE:
            return None

        if c.state is IteratorState.NOT_STARTED:
            c.date = self._date2
            c.last_processed = True
        else:
            c.date = add_intervals(c.date, self._interval, -1)

        if c.date < self._date1:
            c.state = IteratorState.BACKWARD_DONE
            c.first_processed = True
            log.debug("Have passed start date %s", self._date1)
            return None
        c.state = IteratorState.BACKWARD_ACTIVE
        return self._emit(self._series.get_sample(c.date))

    def has_next(self) -> bool:
        return add_intervals(self._cursor.date, self._interval) <= self._date2

    def _unpark_forward(self) -> None:
        self._cursor.date = add_intervals(self._cursor.date, self._interval, -1)

    # -- positional search -------------------------------------------------

    def _begin_search(self, date: TimestampLike) -> tuple[pd.Period, bool, Cursor]:
        if self._cursor.state is IteratorState.NOT_STARTED:
            self.next()
        target = self._series.timestamp(date)
        at_target = target == self._cursor.date and self._cursor.state in _ACTIVE
        return target, at_target, self._cursor.snapshot()

    def _fail(self, saved: Cursor, reset_on_fail: bool) -> None:
        if reset_on_fail:
            self._cursor = saved
        return None

    def go_to(self, date: TimestampLike, reset_on_fail: bool = False) -> Optional[Sample]:
        """Move to exactly *date*; ``None`` if the sub-period has no such step."""
        target, at_target, saved = self._begin_search(date)
        if at_target:
            return self._emit(self._series.get_sample(target))

        if target > self._cursor.date:
            while (sample := self.next()) is not None:
                if sample.date == target:
                    return sample
                if sample.date > target:
                    break
        else:
            while (sample := self.previous()) is not None:
                if sample.date == target:
                    return sample
                if sample.date < target:
                    break
        return self._fail(saved, reset_on_fail)

    def go_to_nearest_next(
        self, date: TimestampLike, reset_on_fail: bool = False,
    ) -> Optional[Sample]:
        """Move to the first step at or after *date* (ceiling match)."""
        target, at_target, saved = self._begin_search(date)
        if at_target:
            return self._emit(self._series.get_sample(target))

        if target > self._cursor.date:
            while (sample := self.next()) is not None:
                if sample.date >= target:
                    return sample
        else:
            while (sample := self.previous()) is not None:
                if sample.date > target:
                    continue
                if sample.date == target:
                    return sample
                # Stepped below the target: the ceiling is one step forward
                sample = self.next()
                if sample is not None:
                    return sample
                break
        return self._fail(saved, reset_on_fail)

    def go_to_nearest_previous(
        self, date: TimestampLike, reset_on_fail: bool = False,
    ) -> Optional[Sample]:
        """Move to the last step at or before *date* (floor match)."""
        target, at_target, saved = self._begin_search(date)
        if at_target:
            return self._emit(self._series.get_sample(target))

        if target > self._cursor.date:
            while (sample := self.next()) is not None:
                if sample.date == target:
                    return sample
                if sample.date > target:
                    # Overshot: the floor is one step back
                    sample = self.previous()
                    if sample is not None:
                        return sample
                    break
        else:
            while (sample := self.previous()) is not None:
                if sample.date <= target:
                    return sample
        return self._fail(saved, reset_on_fail)
