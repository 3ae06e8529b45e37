"""Time primitives — interval descriptors and precision-aware timestamps."""

from .interval import Interval, IntervalBase
from .timestamp import TimestampLike, add_intervals, intervals_between, to_timestamp

__all__ = [
    "Interval",
    "IntervalBase",
    "TimestampLike",
    "add_intervals",
    "intervals_between",
    "to_timestamp",
]
