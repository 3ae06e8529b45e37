"""Tests for tscore.iteration.regular — stepping, direction changes, bounds."""

from __future__ import annotations

import pandas as pd
import pytest

from tscore.iteration import IteratorError, IteratorState, RegularIterator, make_iterator
from tscore.series import RegularSeries, create_series
from tscore.time import Interval, IntervalBase


def _m(text: str) -> pd.Period:
    return pd.Period(text, freq="M")


@pytest.fixture
def series() -> RegularSeries:
    """2000-01..2002-12 monthly, missing except 2001-06 = 5.0."""
    s = create_series("Month", "2000-01", "2002-12")
    s.set_value("2001-06", 5.0)
    return s


# ── construction ─────────────────────────────────────────────────────────

class TestConstruction:
    def test_factory_picks_regular(self, series):
        assert isinstance(series.iterator(), RegularIterator)

    def test_null_series(self):
        with pytest.raises(IteratorError, match="Null time series"):
            make_iterator(None)

    def test_missing_dates(self):
        s = RegularSeries(Interval(IntervalBase.MONTH))
        with pytest.raises(IteratorError, match="starting"):
            s.iterator()
        s.date1 = "2000-01"
        with pytest.raises(IteratorError, match="ending"):
            s.iterator()

    def test_iterator_error_is_value_error(self):
        assert issubclass(IteratorError, ValueError)

    def test_bounds_default_to_series_period(self, series):
        it = series.iterator()
        assert it.date1 == _m("2000-01")
        assert it.date2 == _m("2002-12")
        assert it.state is IteratorState.NOT_STARTED
        assert not it.first_processed
        assert not it.last_processed


# ── forward ──────────────────────────────────────────────────────────────

class TestForward:
    def test_eighteenth_sample(self, series):
        it = series.iterator()
        samples = [it.next() for _ in range(18)]
        assert all(series.is_missing(s.value) for s in samples[:17])
        sample = samples[17]
        assert sample.date == _m("2001-06")
        assert sample.value == 5.0
        assert it.sample is sample

    def test_first_next_does_not_step(self, series):
        it = series.iterator()
        assert it.next().date == _m("2000-01")
        assert it.first_processed
        assert it.state is IteratorState.FORWARD_ACTIVE

    def test_visits_every_step_once(self, series):
        dates = [s.date for s in series.iterator()]
        assert len(dates) == 36
        assert dates[0] == _m("2000-01")
        assert dates[-1] == _m("2002-12")
        assert all(b.ordinal - a.ordinal == 1 for a, b in zip(dates, dates[1:]))

    def test_exhausted_stays_exhausted(self, series):
        it = series.iterator()
        list(it)
        assert it.state is IteratorState.FORWARD_DONE
        assert it.last_processed
        assert it.next() is None
        assert it.next() is None

    def test_unallocated_series_yields_nothing(self):
        s = RegularSeries(Interval(IntervalBase.MONTH))
        s.date1 = "2000-01"
        s.date2 = "2000-12"
        it = s.iterator()
        assert it.next() is None
        assert it.previous() is None

    def test_sub_period_beyond_series_reads_missing(self, series):
        samples = list(series.iterator("1999-11", "2000-02"))
        assert [s.date for s in samples] == [
            _m("1999-11"), _m("1999-12"), _m("2000-01"), _m("2000-02"),
        ]
        assert all(series.is_missing(s.value) for s in samples)


# ── has_next ─────────────────────────────────────────────────────────────

class TestHasNext:
    def test_idempotent(self, series):
        it = series.iterator()
        for _ in range(5):
            assert it.has_next()
        assert it.state is IteratorState.NOT_STARTED
        assert len(list(it)) == 36

    def test_false_on_last_step(self, series):
        it = series.iterator("2002-10", "2002-12")
        it.next()
        it.next()
        assert it.has_next()
        it.next()
        assert not it.has_next()


# ── backward and direction changes ───────────────────────────────────────

class TestBackward:
    def test_pure_backward(self, series):
        it = series.iterator()
        first = it.previous()
        assert first.date == _m("2002-12")
        assert it.last_processed
        assert not it.first_processed

        dates = [first.date]
        while (sample := it.previous()) is not None:
            dates.append(sample.date)
        assert len(dates) == 36
        assert dates[-1] == _m("2000-01")
        assert it.state is IteratorState.BACKWARD_DONE
        assert it.first_processed

    def test_forward_then_back(self, series):
        it = series.iterator()
        for _ in range(3):
            it.next()
        assert it.previous().date == _m("2000-02")
        assert it.previous().date == _m("2000-01")
        assert it.previous() is None
        assert it.previous() is None
        # Parked before date1: forward resumes at the first step
        assert it.next().date == _m("2000-01")

    def test_previous_after_forward_done(self, series):
        it = series.iterator()
        list(it)
        assert it.previous().date == _m("2002-12")
        assert it.state is IteratorState.BACKWARD_ACTIVE


# ── sub-period rebinding ─────────────────────────────────────────────────

class TestRebind:
    def test_set_begin_time_restarts(self, series):
        it = series.iterator()
        for _ in range(4):
            it.next()
        it.set_begin_time("2001-01")
        assert it.state is IteratorState.NOT_STARTED
        assert not it.first_processed
        assert it.next().date == _m("2001-01")

    def test_set_begin_time_keeps_last_processed(self, series):
        it = series.iterator()
        list(it)
        it.set_begin_time("2002-06")
        assert it.last_processed
        assert len(list(it)) == 7

    def test_set_end_time_resumes(self, series):
        it = series.iterator("2000-01", "2000-06")
        assert len(list(it)) == 6
        it.set_end_time("2000-09")
        assert not it.last_processed
        assert it.first_processed
        assert [s.date for s in it] == [_m("2000-07"), _m("2000-08"), _m("2000-09")]
        assert it.last_processed


# ── copy ─────────────────────────────────────────────────────────────────

def test_copy_is_independent(series):
    it = series.iterator()
    it.next()
    it.next()
    clone = it.copy()
    assert clone.next().date == _m("2000-03")
    assert it.date == _m("2000-02")
    assert clone.series is it.series
    assert it.next().date == _m("2000-03")


def test_iteration_does_not_modify_series(series):
    before = series.to_series()
    it = series.iterator()
    list(it)
    it.previous()
    after = series.to_series()
    pd.testing.assert_series_equal(before, after)
