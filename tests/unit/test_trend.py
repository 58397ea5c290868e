"""Unit tests for completion trend synthesis."""

from datetime import datetime

import numpy as np
import pytest

from frontend.flange_dashboard.models import Timeframe
from frontend.flange_dashboard.trend import (
    STARTING_TOTAL_RANGE,
    SyntheticTrendProvider,
    format_trend_date,
    sampling_for,
)


class TestSampling:
    """Test timeframe sampling parameters."""

    def test_known_timeframes(self):
        """Test the sampling table."""
        assert sampling_for("week") == (7, 1, "short")
        assert sampling_for(Timeframe.YEAR) == (365, 30, "month")

    def test_unknown_timeframe_samples_a_week(self):
        """Test the fallback."""
        assert sampling_for("decade") == sampling_for("week")

    def test_date_formats(self):
        """Test short and month-only labels."""
        date = datetime(2026, 10, 7)

        assert format_trend_date(date, "short") == "Oct 7"
        assert format_trend_date(date, "month") == "October"


class TestSyntheticTrendProvider:
    """Test the synthetic completion series."""

    @pytest.mark.parametrize(
        "timeframe, points", [("week", 8), ("month", 11), ("quarter", 13), ("year", 13)]
    )
    def test_point_counts(self, trend_provider, timeframe, points):
        """Test one point per sampled offset."""
        assert len(trend_provider.completion_trend(timeframe)) == points

    def test_week_dates_end_today(self, trend_provider):
        """Test ascending dates ending at the clock's date."""
        series = trend_provider.completion_trend("week")

        assert series[0].date == "Oct 10"
        assert series[-1].date == "Oct 17"

    def test_year_uses_month_labels(self, trend_provider):
        """Test month-only labels for the year timeframe."""
        series = trend_provider.completion_trend("year")

        assert series[-1].date == "October"

    @pytest.mark.parametrize("timeframe", ["week", "month", "quarter", "year"])
    def test_series_invariants(self, trend_provider, timeframe):
        """Test completed <= total and totals never shrink."""
        series = trend_provider.completion_trend(timeframe)

        assert STARTING_TOTAL_RANGE[0] <= series[0].total < STARTING_TOTAL_RANGE[1]
        for point in series:
            assert 0 <= point.completed <= point.total
        totals = [point.total for point in series]
        assert totals == sorted(totals)

    def test_seeded_series_are_reproducible(self, fixed_clock):
        """Test that equal seeds give equal series."""
        first = SyntheticTrendProvider(np.random.default_rng(7), fixed_clock)
        second = SyntheticTrendProvider(np.random.default_rng(7), fixed_clock)

        assert first.completion_trend("month") == second.completion_trend("month")

    def test_unknown_timeframe(self, trend_provider):
        """Test that unknown timeframes behave like a week."""
        assert len(trend_provider.completion_trend("fortnight")) == 8
