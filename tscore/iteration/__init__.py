"""Iteration package — bidirectional traversal of regular and irregular series."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .base import Cursor, IteratorError, IteratorState, SeriesIterator
from .irregular import IrregularIterator
from .regular import RegularIterator

if TYPE_CHECKING:
    from tscore.series.base import Series
    from tscore.time import TimestampLike


def make_iterator(
    series: Series,
    start: Optional[TimestampLike] = None,
    end: Optional[TimestampLike] = None,
) -> SeriesIterator:
    """Build the iterator variant that matches *series*' interval."""
    if series is None:
        raise IteratorError("Null time series for iterator")
    if series.interval.is_regular:
        return RegularIterator(series, start, end)
    return IrregularIterator(series, start, end)


__all__ = [
    "Cursor",
    "IteratorError",
    "IteratorState",
    "SeriesIterator",
    "RegularIterator",
    "IrregularIterator",
    "make_iterator",
]
