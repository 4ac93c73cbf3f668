"""Training load calculations (TSS, TRIMP)."""

import math

from ..utils.numbers import round_half_up


def hr_reserve_fraction(avg_hr: float, max_hr: float, rest_hr: float) -> float:
    """
    Fraction of the heart rate reserve in use, clamped to [0, 1].

    Returns 0.0 when the reserve (max_hr - rest_hr) is zero or negative.
    """
    hr_reserve = max_hr - rest_hr
    if hr_reserve <= 0:
        return 0.0
    fraction = (avg_hr - rest_hr) / hr_reserve
    return max(0.0, min(1.0, fraction))


def calculate_tss(
    duration_min: float,
    avg_hr: float,
    max_hr: float,
    rest_hr: float = 60,
) -> int:
    """
    Heart-rate based Training Stress Score.

    The intensity factor is the heart rate reserve fraction, so one hour
    at max HR scores 100 and anything at or below resting HR scores 0.

    Args:
        duration_min: Duration of activity in minutes
        avg_hr: Average heart rate during activity
        max_hr: Maximum heart rate
        rest_hr: Resting heart rate

    Returns:
        TSS rounded to the nearest integer
    """
    if duration_min <= 0:
        return 0
    intensity_factor = min(hr_reserve_fraction(avg_hr, max_hr, rest_hr), 1.0)

    # TSS = hours * IF^2 * 100
    tss = (duration_min / 60) * (intensity_factor ** 2) * 100
    return round_half_up(tss)



def calculate_trimp(
    duration_min: float,
    avg_hr: float,
    max_hr: float,
    rest_hr: float = 60,
    gender: str = "male",
) -> int:
    """
    Training Impulse using Banister's exponential formula.

    TRIMP = minutes * HRr * 0.64 * e^(b * HRr), with b = 1.92 for men and
    1.67 for women. The heart rate reserve fraction HRr is not clamped, so
    averages above max HR keep growing exponentially.

    Args:
        duration_min: Duration of activity in minutes
        avg_hr: Average heart rate during activity
        max_hr: Maximum heart rate
        rest_hr: Resting heart rate
        gender: 'male' or 'female' (selects the exponent weighting)

    Returns:
        TRIMP rounded to the nearest integer; 0 when the HR reserve is
        zero or negative
    """
    hr_reserve = max_hr - rest_hr
    if hr_reserve <= 0:
        return 0

    delta_hr = (avg_hr - rest_hr) / hr_reserve
    b = 1.67 if gender.lower() == "female" else 1.92

    trimp = duration_min * delta_hr * 0.64 * math.exp(b * delta_hr)
    return round_half_up(trimp)
