"""Tests for tscore.series.store — O(1) date → slot addressing."""

from __future__ import annotations

import pandas as pd

from tscore.series.store import (
    DataPosition,
    DayStore,
    HourStore,
    MinuteStore,
    MonthStore,
    YearStore,
    store_for,
)
from tscore.time import IntervalBase


def _p(text: str, freq: str) -> pd.Period:
    return pd.Period(text, freq=freq)


# ── layouts ──────────────────────────────────────────────────────────────

class TestMonthStore:
    def _store(self) -> MonthStore:
        return MonthStore(_p("2000-01", "M"), _p("2002-12", "M"), -999.0)

    def test_shape_is_years_by_months(self):
        assert self._store().shape == (3, 12)

    def test_resolve_year_offset_and_month(self):
        assert self._store().resolve(_p("2001-06", "M")) == DataPosition(1, 5)

    def test_out_of_period_is_rejected(self):
        store = self._store()
        assert store.resolve(_p("1999-12", "M")) is None
        assert store.resolve(_p("2003-01", "M")) is None

    def test_partial_first_year(self):
        store = MonthStore(_p("2000-10", "M"), _p("2001-02", "M"), 0.0)
        assert store.shape == (2, 12)
        assert store.resolve(_p("2000-09", "M")) is None
        assert store.resolve(_p("2001-02", "M")) == DataPosition(1, 1)

    def test_filled_with_fill_value(self):
        store = self._store()
        pos = store.resolve(_p("2002-12", "M"))
        assert store.get(pos) == -999.0


class TestYearStore:
    def test_single_level(self):
        store = YearStore(_p("2000", "Y"), _p("2002", "Y"), 0.0)
        assert store.shape == (3,)
        pos = store.resolve(_p("2001", "Y"))
        assert pos == DataPosition(1)
        assert pos.index == (1,)


class TestDayStore:
    def test_rows_are_months(self):
        store = DayStore(_p("2000-01-30", "D"), _p("2000-03-02", "D"), 0.0)
        assert store.shape == (3, 31)
        assert store.resolve(_p("2000-02-29", "D")) == DataPosition(1, 28)
        assert store.resolve(_p("2000-01-29", "D")) is None


class TestHourStore:
    def test_rows_are_days(self):
        store = HourStore(_p("2000-01-01 00:00", "h"), _p("2000-01-02 23:00", "h"), 0.0)
        assert store.shape == (2, 24)
        assert store.resolve(_p("2000-01-02 05:00", "h")) == DataPosition(1, 5)


class TestMinuteStore:
    def test_rows_are_hours(self):
        store = MinuteStore(
            _p("2000-01-01 00:00", "min"), _p("2000-01-01 01:30", "min"), 0.0,
        )
        assert store.shape == (2, 60)
        assert store.resolve(_p("2000-01-01 01:07", "min")) == DataPosition(1, 7)


# ── values and flags ─────────────────────────────────────────────────────

def test_set_then_get():
    store = MonthStore(_p("2000-01", "M"), _p("2000-12", "M"), -999.0)
    pos = store.resolve(_p("2000-04", "M"))
    store.set(pos, 12.5)
    assert store.get(pos) == 12.5


def test_flags_allocated_lazily():
    store = MonthStore(_p("2000-01", "M"), _p("2000-12", "M"), -999.0)
    pos = store.resolve(_p("2000-04", "M"))
    assert not store.has_flags
    assert store.get_flag(pos) == ""

    store.set_flag(pos, "E")
    assert store.has_flags
    assert store.get_flag(pos) == "E"
    assert store.get_flag(store.resolve(_p("2000-05", "M"))) == ""


# ── registry ─────────────────────────────────────────────────────────────

def test_registry():
    assert store_for(IntervalBase.MONTH) is MonthStore
    assert store_for(IntervalBase.YEAR) is YearStore
    assert store_for(IntervalBase.IRREGULAR) is None
