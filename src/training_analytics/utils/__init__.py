"""Utility functions shared by the analyzers."""

from .geo import EARTH_RADIUS_M, haversine_distance_m
from .numbers import round_half_up, round_to_tenth
from .dates import align_to, as_aware, day_boundary, local_day, resolve_timezone
from .downsample import downsample_lttb

__all__ = [
    "EARTH_RADIUS_M",
    "haversine_distance_m",
    "round_half_up",
    "round_to_tenth",
    "align_to",
    "as_aware",
    "day_boundary",
    "local_day",
    "resolve_timezone",
    "downsample_lttb",
]
