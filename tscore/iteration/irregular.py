"""Irregular-interval iterator — walks the series' ordered sample list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from tscore.iteration.base import IteratorError, IteratorState, SeriesIterator
from tscore.series.sample import Sample
from tscore.time import TimestampLike

if TYPE_CHECKING:
    from tscore.series.irregular import IrregularSeries

log = logging.getLogger(__name__)


class IrregularIterator(SeriesIterator):
    """Iterator over an irregular series.

    There is no step to add, so the first :meth:`next` (or :meth:`previous`)
    scans the list linearly for the sample dated exactly ``date1`` (or
    ``date2``); after that each call moves one list entry.  If the sub-period
    bound has no sample the traversal yields nothing.

    Positional search is not available: the ``go_to*`` methods always return
    ``None``.
    """

    def __init__(
        self,
        series: IrregularSeries,
        start: Optional[TimestampLike] = None,
        end: Optional[TimestampLike] = None,
    ) -> None:
        super().__init__(series, start, end)
        if self._interval.is_regular:
            raise IteratorError("IrregularIterator requires an irregular series")

    # -- stepping ----------------------------------------------------------

    def _next_index(self) -> int:
        samples = self._series.samples
        i = self._cursor.index + 1
        # After a failed backward scan the cursor is parked before the list
        while i < len(samples) and samples[i].date < self._date1:
            i += 1
        return i

    def _previous_index(self) -> int:
        samples = self._series.samples
        i = self._cursor.index - 1
        while i >= 0 and samples[i].date > self._date2:
            i -= 1
        return i

    def next(self) -> Optional[Sample]:
        samples = self._series.samples
        if not samples:
            return None
        c = self._cursor
        if c.state is IteratorState.FORWARD_DONE:
            return None

        if c.state is IteratorState.NOT_STARTED:
            c.first_processed = True
            i = next(
                (k for k, s in enumerate(samples) if s.date == self._date1), None,
            )
            if i is None:
                log.debug("No sample at start date %s", self._date1)
                return self._park_forward(len(samples))
        else:
            i = self._next_index()

        if i >= len(samples) or samples[i].date > self._date2:
            log.debug("Have passed end date %s", self._date2)
            return self._park_forward(i)

        c.index = i
        c.date = samples[i].date
        c.state = IteratorState.FORWARD_ACTIVE
        return self._emit(samples[i])

    def previous(self) -> Optional[Sample]:
        samples = self._series.samples
        if not samples:
            return None
        c = self._cursor
        if c.state is IteratorState.BACKWARD_DONE:
            return None

        if c.state is IteratorState.NOT_STARTED:
            c.last_processed = True
            i = next(
                (k for k in range(len(samples) - 1, -1, -1)
                 if samples[k].date == self._date2),
                None,
            )
            if i is None:
                log.debug("No sample at end date %s", self._date2)
                return self._park_backward(-1)
        else:
            i = self._previous_index()

        if i < 0 or samples[i].date < self._date1:
            log.debug("Have passed start date %s", self._date1)
            return self._park_backward(i)

        c.index = i
        c.date = samples[i].date
        c.state = IteratorState.BACKWARD_ACTIVE
        return self._emit(samples[i])

    def _park_forward(self, i: int) -> None:
        c = self._cursor
        c.index = i
        c.state = IteratorState.FORWARD_DONE
        c.last_processed = True
        return None

    def _park_backward(self, i: int) -> None:
        c = self._cursor
        c.index = i
        c.state = IteratorState.BACKWARD_DONE
        c.first_processed = True
        return None

    def _unpark_forward(self) -> None:
        self._cursor.index -= 1

    def has_next(self) -> bool:
        """Peek at the following list entry without moving."""
        if self._cursor.state in (IteratorState.NOT_STARTED, IteratorState.FORWARD_DONE):
            return False
        samples = self._series.samples
        i = self._next_index()
        if i >= len(samples):
            return False
        return samples[i].date <= self._date2

    # -- positional search (unsupported) -----------------------------------

    def go_to(self, date: TimestampLike, reset_on_fail: bool = False) -> Optional[Sample]:
        log.warning("go_to() is not implemented for irregular series")
        return None

    def go_to_nearest_next(
        self, date: TimestampLike, reset_on_fail: bool = False,
    ) -> Optional[Sample]:
        log.warning("go_to_nearest_next() is not implemented for irregular series")
        return None

    def go_to_nearest_previous(
        self, date: TimestampLike, reset_on_fail: bool = False,
    ) -> Optional[Sample]:
        log.warning("go_to_nearest_previous() is not implemented for irregular series")
        return None
