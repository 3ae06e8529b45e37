"""Series package — samples, addressable stores, regular and irregular series."""

from .base import DEFAULT_MISSING, AllocationStatus, Series
from .factory import create_series
from .irregular import IrregularSeries
from .regular import RegularSeries
from .sample import Sample
from .store import (
    AddressableStore,
    DataPosition,
    DayStore,
    HourStore,
    MinuteStore,
    MonthStore,
    YearStore,
    register_store,
    store_for,
)

__all__ = [
    "DEFAULT_MISSING",
    "AllocationStatus",
    "Series",
    "RegularSeries",
    "IrregularSeries",
    "Sample",
    "AddressableStore",
    "DataPosition",
    "YearStore",
    "MonthStore",
    "DayStore",
    "HourStore",
    "MinuteStore",
    "register_store",
    "store_for",
    "create_series",
]
