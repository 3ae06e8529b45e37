"""Tests for positional search on the regular iterator.

Exact, ceiling (nearest-next) and floor (nearest-previous) matches, in both
directions, with and without cursor restore on failure.
"""

from __future__ import annotations

import pandas as pd
import pytest

from tscore.iteration import IteratorState
from tscore.series import RegularSeries, Sample, create_series
from tscore.time import Interval, IntervalBase


def _m(text: str) -> pd.Period:
    return pd.Period(text, freq="M")


@pytest.fixture
def series() -> RegularSeries:
    s = create_series("Month", "2000-01", "2002-12")
    s.set_value("2001-06", 5.0)
    return s


class _BiMonthly(RegularSeries):
    """Two-month steps 2000-01, 03 .. 11; each value is the month number.

    Stores only support single-step intervals, so values are computed.
    """

    def __init__(self) -> None:
        super().__init__(Interval(IntervalBase.MONTH, 2))
        self.date1 = "2000-01"
        self.date2 = "2000-11"

    @property
    def data_size(self) -> int:
        return 6

    def get_sample(self, date) -> Sample:
        ts = self.timestamp(date)
        return Sample(ts, float(ts.month))


@pytest.fixture
def bimonthly() -> _BiMonthly:
    return _BiMonthly()


def _state(it):
    return it.date, it.state, it.first_processed, it.last_processed


# ── go_to ────────────────────────────────────────────────────────────────

class TestGoTo:
    def test_exact_forward(self, series):
        it = series.iterator()
        sample = it.go_to("2001-06", True)
        assert sample.value == 5.0
        assert it.first_processed
        assert it.date == _m("2001-06")

    def test_before_start_restores_cursor(self, series):
        it = series.iterator()
        assert it.go_to("1999-01", True) is None
        assert it.date == _m("2000-01")
        assert it.state is IteratorState.FORWARD_ACTIVE

    def test_backward(self, series):
        it = series.iterator()
        it.go_to("2002-01")
        sample = it.go_to("2000-05")
        assert sample.date == _m("2000-05")
        assert it.state is IteratorState.BACKWARD_ACTIVE

    def test_target_at_cursor(self, series):
        it = series.iterator()
        it.go_to("2000-04")
        assert it.go_to("2000-04").date == _m("2000-04")
        assert it.date == _m("2000-04")

    def test_target_at_date1_on_fresh_iterator(self, series):
        it = series.iterator()
        assert it.go_to("2000-01").date == _m("2000-01")

    def test_failure_without_reset_leaves_cursor_parked(self, series):
        it = series.iterator()
        assert it.go_to("2003-05") is None
        assert it.state is IteratorState.FORWARD_DONE
        assert it.date == _m("2003-01")
        assert it.next() is None

    def test_off_grid_target(self, bimonthly):
        it = bimonthly.iterator()
        assert it.go_to("2000-04", True) is None
        assert it.date == _m("2000-01")

    @pytest.mark.parametrize("k", [1, 2, 7, 18, 36])
    def test_matches_kth_next(self, series, k):
        walker = series.iterator()
        for _ in range(k):
            expected = walker.next()
        assert series.iterator().go_to(expected.date) == expected


# ── nearest next (ceiling) ───────────────────────────────────────────────

class TestNearestNext:
    def test_on_grid(self, series):
        it = series.iterator()
        assert it.go_to_nearest_next("2001-06").value == 5.0

    def test_forward_ceiling(self, bimonthly):
        it = bimonthly.iterator()
        assert it.go_to_nearest_next("2000-04").date == _m("2000-05")

    def test_backward_ceiling(self, bimonthly):
        it = bimonthly.iterator()
        it.go_to("2000-09")
        sample = it.go_to_nearest_next("2000-04")
        assert sample.date == _m("2000-05")
        assert sample.value == 5.0
        assert it.state is IteratorState.FORWARD_ACTIVE

    def test_past_end_restores(self, series):
        it = series.iterator()
        it.go_to("2001-03")
        before = _state(it)
        assert it.go_to_nearest_next("2003-06", True) is None
        assert _state(it) == before

    def test_before_start_fails(self, series):
        it = series.iterator()
        it.go_to("2000-06")
        assert it.go_to_nearest_next("1999-06") is None
        assert it.state is IteratorState.BACKWARD_DONE


# ── nearest previous (floor) ─────────────────────────────────────────────

class TestNearestPrevious:
    def test_forward_floor(self, bimonthly):
        it = bimonthly.iterator()
        sample = it.go_to_nearest_previous("2000-04")
        assert sample.date == _m("2000-03")
        assert it.state is IteratorState.BACKWARD_ACTIVE

    def test_backward_floor(self, bimonthly):
        it = bimonthly.iterator()
        it.go_to("2000-09")
        assert it.go_to_nearest_previous("2000-04").date == _m("2000-03")

    def test_past_end_fails(self, bimonthly):
        it = bimonthly.iterator()
        assert it.go_to_nearest_previous("2001-06") is None
        assert it.state is IteratorState.FORWARD_DONE

    def test_before_start_restores(self, series):
        it = series.iterator()
        it.go_to("2000-03")
        before = _state(it)
        assert it.go_to_nearest_previous("1998-01", True) is None
        assert _state(it) == before
