"""
Track analysis for individual workouts.

Provides elevation profiles, distance/time splits and chart preparation
from GPS tracks and activity streams.
"""

from .elevation import (
    AxisBounds,
    ElevationPoint,
    ElevationProfile,
    ElevationStats,
    analyze_elevation,
    build_elevation_points,
    calculate_gain_loss,
    elevation_axis_bounds,
    max_sustained_grade,
    smooth_grades,
)
from .segments import (
    Segment,
    SegmentMode,
    average_heart_rate,
    default_segment_distance,
    find_fastest_segment,
    find_slowest_segment,
    split_track,
)
from .charts import (
    ChartRow,
    PreparedChart,
    axis_domain,
    build_chart_rows,
    prepare_chart,
)

__all__ = [
    # Elevation
    "AxisBounds",
    "ElevationPoint",
    "ElevationProfile",
    "ElevationStats",
    "analyze_elevation",
    "build_elevation_points",
    "calculate_gain_loss",
    "elevation_axis_bounds",
    "max_sustained_grade",
    "smooth_grades",
    # Segments
    "Segment",
    "SegmentMode",
    "average_heart_rate",
    "default_segment_distance",
    "find_fastest_segment",
    "find_slowest_segment",
    "split_track",
    # Charts
    "ChartRow",
    "PreparedChart",
    "axis_domain",
    "build_chart_rows",
    "prepare_chart",
]
