"""Tests for elevation profile analysis."""

import pytest

from training_analytics.analysis.elevation import (
    ElevationPoint,
    analyze_elevation,
    build_elevation_points,
    calculate_gain_loss,
    elevation_axis_bounds,
    max_sustained_grade,
    smooth_grades,
)
from training_analytics.models import GpsPoint


def _profile_points(pairs):
    """ElevationPoints from (distance_m, altitude) pairs."""
    return [
        ElevationPoint(distance_m=d, altitude=a, grade=0.0, index=i)
        for i, (d, a) in enumerate(pairs)
    ]


class TestElevationSeries:
    """Tests for building the raw distance/altitude/grade series."""

    def test_monotonic_climb(self, make_track):
        """Steady 1 m per 26 m climb: 3.8% grade after the first point."""
        series = build_elevation_points(make_track(10, altitude_fn=lambda i: 100 + i))
        assert len(series) == 10
        assert series[0].grade == 0.0
        assert all(p.grade == 3.8 for p in series[1:])
        assert series[-1].distance_m == pytest.approx(234.0, abs=0.01)

    def test_zero_distance_grade(self):
        """Coincident points get grade 0 rather than infinity."""
        points = [
            GpsPoint(lat=45.0, lon=7.0, altitude=100.0),
            GpsPoint(lat=45.0, lon=7.0, altitude=110.0),
        ]
        series = build_elevation_points(points)
        assert [p.grade for p in series] == [0.0, 0.0]

    def test_distance_accrues_without_altitude(self, make_track):
        """A point without altitude still moves the athlete forward."""
        altitudes = {0: 100.0, 2: 102.34}
        series = build_elevation_points(make_track(3, altitude_fn=altitudes.get))
        assert [p.index for p in series] == [0, 2]
        assert series[1].distance_m == pytest.approx(52.0, abs=0.01)
        assert series[1].grade == 4.5

    def test_missing_coordinates_break_distance(self, make_track):
        """Pairs touching a point without coordinates add no distance."""
        track = make_track(3, altitude_fn=lambda i: 100.0)
        track[1] = track[1].model_copy(update={"lat": None, "lon": None})
        series = build_elevation_points(track)
        assert series[-1].distance_m == 0.0
        assert series[-1].grade == 0.0


class TestGradeSmoothing:
    """Tests for the centered moving average."""

    def test_spike_is_spread(self):
        """A single spike is averaged with its neighbours."""
        assert smooth_grades([0, 0, 0, 10, 0, 0, 0], radius=1) == [0.0, 0.0, 3.3, 3.3, 3.3, 0.0, 0.0]

    def test_window_clamped_at_ends(self):
        """Ends average over the samples that exist."""
        assert smooth_grades([0.0, 6.0], radius=5) == [3.0, 3.0]

    def test_input_not_modified(self):
        """Each output uses raw neighbours, not already smoothed ones."""
        grades = [0.0, 9.0, 0.0, 0.0]
        smooth_grades(grades, radius=1)
        assert grades == [0.0, 9.0, 0.0, 0.0]

    def test_radius_zero_is_identity(self):
        """Radius 0 leaves grades unchanged."""
        assert smooth_grades([1.2, -3.4, 5.0], radius=0) == [1.2, -3.4, 5.0]


class TestGainLoss:
    """Tests for cumulative climb and descent."""

    def test_up_and_down(self):
        """Positive and negative deltas are summed separately."""
        assert calculate_gain_loss([100, 110, 105, 120, 90]) == (25, 35)

    def test_missing_altitudes_skipped(self):
        """Pairs with a missing altitude are ignored."""
        assert calculate_gain_loss([100, None, 150, 160]) == (10, 0)

    def test_gain_minus_loss_is_net_change(self):
        """Without gaps, gain - loss equals last - first altitude."""
        altitudes = [312.0, 318.5, 301.2, 299.9, 340.0, 322.7]
        gain, loss = calculate_gain_loss(altitudes)
        assert gain - loss == pytest.approx(altitudes[-1] - altitudes[0])


class TestMaxSustainedGrade:
    """Tests for the distance-windowed max grade."""

    def test_uniform_slope(self):
        """A uniform 5% slope reads 5%."""
        points = _profile_points([(0, 0), (50, 2.5), (100, 5.0), (150, 7.5)])
        assert max_sustained_grade(points) == pytest.approx(5.0)

    def test_falls_back_to_minimum_window(self):
        """Tracks shorter than the target window use the minimum window."""
        points = _profile_points([(0, 0), (40, 4.0)])
        assert max_sustained_grade(points) == pytest.approx(10.0)

    def test_short_track_has_no_grade(self):
        """No pair of points 30 m apart means 0."""
        points = _profile_points([(0, 0), (10, 5), (20, 10)])
        assert max_sustained_grade(points) == 0.0

    def test_short_spike_suppressed(self):
        """A 5 m jump over 5 m is measured over the whole window."""
        points = _profile_points([(0, 0), (5, 5), (105, 5)])
        assert max_sustained_grade(points) == pytest.approx(5 / 105 * 100)

    def test_descents_count(self):
        """Grade is absolute."""
        points = _profile_points([(0, 20), (100, 12)])
        assert max_sustained_grade(points) == pytest.approx(8.0)


class TestAxisBounds:
    """Tests for the padded altitude axis."""

    @pytest.mark.parametrize(
        "lo,hi,expected",
        [
            (100, 200, (80, 220)),  # 20 m padding, 10 m steps
            (100, 500, (0, 600)),   # 60 m padding, 50 m steps
            (100, 300, (50, 350)),  # 30 m padding, 25 m steps
        ],
    )
    def test_bounds(self, lo, hi, expected):
        """Bounds are padded and rounded outward to the step."""
        bounds = elevation_axis_bounds(lo, hi)
        assert (bounds.min, bounds.max) == expected

    def test_bounds_contain_data(self):
        """The axis always encloses the data."""
        bounds = elevation_axis_bounds(1234, 1261)
        assert bounds.min <= 1234 - 20
        assert bounds.max >= 1261 + 20


class TestAnalyzeElevation:
    """End-to-end elevation analysis."""

    def test_monotonic_climb(self, make_track):
        """Stats for a steady 9 m climb."""
        profile = analyze_elevation(make_track(10, altitude_fn=lambda i: 100 + i))
        assert not profile.is_empty
        assert profile.stats.min_altitude == 100
        assert profile.stats.max_altitude == 109
        assert profile.stats.total_gain == 9
        assert profile.stats.total_loss == 0
        assert profile.stats.max_grade == 3.8
        assert profile.stats.avg_grade == pytest.approx(3.5)
        assert (profile.bounds.min, profile.bounds.max) == (80, 130)

    def test_smoothed_grades_replace_raw(self, make_track):
        """Returned points carry smoothed grades."""
        profile = analyze_elevation(make_track(10, altitude_fn=lambda i: 100 + i))
        assert profile.points[0].grade == 3.2
        assert profile.points[-1].grade == 3.8

    def test_no_altitude_is_empty(self, make_track):
        """A track without altitude yields an empty profile."""
        profile = analyze_elevation(make_track(20))
        assert profile.is_empty
        assert profile.bounds is None
        assert profile.stats.total_gain == 0
        assert profile.to_dict()["points"] == []

    def test_single_altitude_is_empty(self, make_track):
        """One altitude reading is not a profile."""
        profile = analyze_elevation(make_track(5, altitude_fn=lambda i: 100.0 if i == 2 else None))
        assert profile.is_empty

    def test_stats_rounded_half_up(self, make_track):
        """Altitude stats are whole meters."""
        profile = analyze_elevation(make_track(2, altitude_fn=lambda i: 100.5 + i))
        assert profile.stats.min_altitude == 101
        assert profile.stats.max_altitude == 102
        assert profile.stats.total_gain == 1

    def test_loss_on_descent(self, make_track):
        """Descending tracks report loss and negative grades."""
        profile = analyze_elevation(make_track(10, altitude_fn=lambda i: 200 - 2 * i))
        assert profile.stats.total_loss == 18
        assert profile.stats.total_gain == 0
        assert profile.stats.avg_grade < 0
        assert profile.stats.max_grade > 0
