"""Monday-start week windows."""

from datetime import date, datetime, time, timedelta
from typing import List, Union

from blockplanner.models.constants import DAYS_PER_WEEK
from blockplanner.models.layout import WeekRange

DateLike = Union[date, datetime]

_END_OF_DAY = time(23, 59, 59, 999000)


def _as_date(reference: DateLike) -> date:
    return reference.date() if isinstance(reference, datetime) else reference


def week_start_date(reference: DateLike) -> date:
    """The Monday on or before reference."""
    d = _as_date(reference)
    # Python weekday: Monday=0 ... Sunday=6
    return d - timedelta(days=d.weekday())


def week_range(reference: DateLike) -> WeekRange:
    """Monday 00:00:00.000 through Sunday 23:59:59.999 of reference's week.

    Aware datetimes keep their tzinfo; dates and naive datetimes yield naive bounds.
    """
    tz = reference.tzinfo if isinstance(reference, datetime) else None
    monday = week_start_date(reference)
    sunday = monday + timedelta(days=DAYS_PER_WEEK - 1)
    return WeekRange(
        start=datetime.combine(monday, time(0, 0), tzinfo=tz),
        end=datetime.combine(sunday, _END_OF_DAY, tzinfo=tz),
    )


def week_days(reference: DateLike) -> List[date]:
    """All seven dates of reference's week, Monday first."""
    monday = week_start_date(reference)
    return [monday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def day_index(d: DateLike) -> int:
    """0 = Monday ... 6 = Sunday."""
    return _as_date(d).weekday()


def shift_week(reference: DateLike, weeks: int) -> DateLike:
    """Move a reference date by whole weeks (toolbar previous/next)."""
    return reference + timedelta(weeks=weeks)


def format_date_range(start: DateLike, end: DateLike) -> str:
    """Format as "Jan 20 – Jan 26"."""
    return f"{start:%b} {start.day} – {end:%b} {end.day}"
