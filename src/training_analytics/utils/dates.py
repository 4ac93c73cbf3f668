"""Calendar-day policy helpers.

Training load is bucketed per calendar day. Which day a workout belongs to
depends on the viewer's timezone, so the policy is an explicit function
rather than an implicit ``datetime.now()``.
"""

from datetime import date, datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import ConfigurationError

DayBoundary = Callable[[datetime], date]


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve an IANA timezone name, ``None`` meaning host local time.

    Raises:
        ConfigurationError: if the name is not a known timezone
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"Unknown timezone: {name}",
            details={"timezone": name},
        ) from e


def local_day(moment: datetime) -> date:
    """Calendar day of ``moment`` in the host's local timezone.

    Naive datetimes are taken as already local.
    """
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()


def day_boundary(tz: Optional[tzinfo] = None) -> DayBoundary:
    """
    Build a function mapping a datetime to its calendar day in ``tz``.

    Args:
        tz: Target timezone; ``None`` falls back to host local time

    Returns:
        Callable taking a datetime and returning a date
    """
    if tz is None:
        return local_day

    def _day_of(moment: datetime) -> date:
        if moment.tzinfo is None:
            return moment.date()
        return moment.astimezone(tz).date()

    return _day_of


def as_aware(moment: datetime) -> datetime:
    """Attach the host-local offset to naive datetimes; aware ones pass through."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


def align_to(moment: datetime, reference: datetime) -> datetime:
    """
    Express ``moment`` the way ``reference`` is expressed.

    Naive datetimes are host-local time, so an aware ``moment`` compared
    against a naive ``reference`` becomes naive local time and vice versa.
    Datetimes that already agree are returned unchanged.
    """
    if (moment.tzinfo is None) == (reference.tzinfo is None):
        return moment
    if reference.tzinfo is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone()
