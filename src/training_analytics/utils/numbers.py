"""Rounding helpers matching the display layer's conventions."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity.

    Python's ``round`` uses banker's rounding (``round(0.5) == 0``); the
    dashboards consuming these numbers expect ``floor(x + 0.5)``.
    """
    return int(math.floor(value + 0.5))


def round_to_tenth(value: float) -> float:
    """Round to one decimal place with half-up semantics."""
    return round_half_up(value * 10) / 10
