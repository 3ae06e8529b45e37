"""Series factory — builds the series variant for an interval."""

from __future__ import annotations

import logging
from typing import Optional, Union

from tscore.series.base import Series
from tscore.series.irregular import IrregularSeries
from tscore.series.regular import RegularSeries
from tscore.time import Interval, IntervalBase, TimestampLike

log = logging.getLogger(__name__)


def create_series(
    interval: Union[Interval, str],
    start: Optional[TimestampLike] = None,
    end: Optional[TimestampLike] = None,
    *,
    allocate: bool = True,
    **kwargs,
) -> Series:
    """Create a regular or irregular series and (optionally) allocate it.

    Parameters
    ----------
    interval : Interval or str
        Interval descriptor, or a string accepted by :meth:`Interval.parse`.
    start, end : timestamp-like, optional
        Period bounds.
    allocate : bool
        Call :meth:`Series.allocate_data_space` when both bounds are given.
    **kwargs
        Passed to the series constructor (``missing``, ``description``,
        ``units``, and ``precision`` for irregular series).

    Raises
    ------
    ValueError
        If allocation of a regular series fails.
    """
    if isinstance(interval, str):
        interval = Interval.parse(interval)

    if interval.is_regular:
        kwargs.pop("precision", None)
        series: Series = RegularSeries(interval, **kwargs)
    else:
        series = IrregularSeries(kwargs.pop("precision", None) or IntervalBase.DAY, **kwargs)

    if start is not None:
        series.date1 = start
    if end is not None:
        series.date2 = end

    if allocate and interval.is_regular and start is not None and end is not None:
        status = series.allocate_data_space()
        if not status:
            raise ValueError(
                f"Cannot allocate {interval} series for {start}..{end}: {status.name}"
            )
    series.add_to_genesis(f"Created {interval} series")
    log.debug("Created %r", series)
    return series
