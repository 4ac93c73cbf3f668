"""Tests for LTTB downsampling."""

import math

import pytest

from training_analytics.exceptions import InvalidParameterError
from training_analytics.utils.downsample import downsample_lttb


def _wave(n):
    return [{"t": i, "hr": 140 + 20 * math.sin(i / 15)} for i in range(n)]


def _hr(point):
    return point["hr"]


class TestDownsampleIdentity:
    """Series within budget are returned unchanged."""

    def test_shorter_than_target(self):
        """Fewer points than the target returns the input."""
        series = _wave(50)
        assert downsample_lttb(series, 100, _hr) == series

    def test_equal_to_target(self):
        """Exactly the target returns the input."""
        series = _wave(100)
        assert downsample_lttb(series, 100, _hr) == series

    def test_empty_series(self):
        """Empty input stays empty."""
        assert downsample_lttb([], 10, _hr) == []


class TestDownsampleReduction:
    """Tests for the reduction itself."""

    def test_output_length_matches_target(self):
        """Output has exactly target_count points."""
        result = downsample_lttb(_wave(1000), 100, _hr)
        assert len(result) == 100

    def test_first_and_last_kept(self):
        """Temporal span is preserved."""
        series = _wave(1000)
        result = downsample_lttb(series, 37, _hr)
        assert result[0] is series[0]
        assert result[-1] is series[-1]

    def test_output_is_chronological(self):
        """Selected points keep their order."""
        result = downsample_lttb(_wave(1000), 50, _hr)
        times = [p["t"] for p in result]
        assert times == sorted(times)
        assert len(set(times)) == len(times)

    def test_idempotent(self):
        """Downsampling an already reduced series changes nothing."""
        once = downsample_lttb(_wave(1000), 80, _hr)
        twice = downsample_lttb(once, 80, _hr)
        assert twice == once

    def test_deterministic(self):
        """Identical input gives identical output."""
        series = _wave(777)
        assert downsample_lttb(series, 60, _hr) == downsample_lttb(series, 60, _hr)

    def test_spike_is_preserved(self):
        """A single spike survives because it forms the largest triangle."""
        series = [{"t": i, "hr": 0.0} for i in range(100)]
        series[50]["hr"] = 100.0
        result = downsample_lttb(series, 10, _hr)
        assert any(p["t"] == 50 for p in result)

    def test_ties_keep_first_point(self):
        """On a flat series every area is equal, so each bucket keeps its first point."""
        series = [{"t": i, "hr": 100.0} for i in range(12)]
        result = downsample_lttb(series, 4, _hr)
        assert [p["t"] for p in result] == [0, 1, 6, 11]

    def test_target_two_keeps_endpoints(self):
        """A budget of two keeps only the endpoints."""
        series = _wave(10)
        assert downsample_lttb(series, 2, _hr) == [series[0], series[-1]]

    def test_target_below_two_raises(self):
        """A budget below two cannot hold the endpoints."""
        with pytest.raises(InvalidParameterError):
            downsample_lttb(_wave(10), 1, _hr)


class TestDownsampleMissingValues:
    """Null values are ignored for area computation."""

    def test_nulls_do_not_break_length(self):
        """Gaps in the series still give a full-size output."""
        series = _wave(500)
        for i in range(100, 200):
            series[i]["hr"] = None
        result = downsample_lttb(series, 50, _hr)
        assert len(result) == 50
        assert result[0] is series[0]
        assert result[-1] is series[-1]

    def test_non_null_preferred_within_bucket(self):
        """A bucket with one valid point selects that point."""
        series = [{"t": i, "hr": None} for i in range(12)]
        series[0]["hr"] = 100.0
        series[11]["hr"] = 100.0
        series[7]["hr"] = 150.0
        # 10 interior points, 2 buckets of 5: [1..5] and [6..10]
        result = downsample_lttb(series, 4, _hr)
        assert [p["t"] for p in result] == [0, 1, 7, 11]

    def test_works_with_attribute_selector(self):
        """Any callable selector works, not just dict keys."""

        class Sample:
            def __init__(self, value):
                self.value = value

        series = [Sample(float(i % 7)) for i in range(300)]
        result = downsample_lttb(series, 30, lambda s: s.value)
        assert len(result) == 30
