"""Planned-hours totals for the capacity view.

Sums block durations per day, per user and per week. Blocks are attributed to
the local day they start on, the same rule the grid layout uses.
"""

import math
from datetime import date, datetime, tzinfo
from typing import Dict, List, Sequence, Union

from pydantic import BaseModel, Field

from blockplanner.engine.layout import local_day
from blockplanner.engine.week_range import week_days
from blockplanner.models.work_block import WorkBlock


def duration_minutes(block: WorkBlock) -> int:
    """Whole minutes between start and end, rounded half up, never negative."""
    minutes = (block.end_at - block.start_at).total_seconds() / 60
    return max(0, int(math.floor(minutes + 0.5)))


def format_hours(minutes: int, fraction_digits: int = 1) -> str:
    """Format minutes as decimal hours, e.g. 90 -> "1.5"."""
    return f"{minutes / 60:.{fraction_digits}f}"


class UserCapacity(BaseModel):
    """One user's planned minutes for a week."""

    user_id: str
    minutes_by_day: Dict[date, int] = Field(default_factory=dict)
    weekly_minutes: int = 0


class CapacitySummary(BaseModel):
    """Planned minutes for a week, per day and per user."""

    days: List[date]
    minutes_by_day: Dict[date, int]
    users: Dict[str, UserCapacity] = Field(default_factory=dict)
    total_minutes: int = 0


def summarize_capacity(
    blocks: Sequence[WorkBlock],
    reference: Union[date, datetime],
    tz: tzinfo,
) -> CapacitySummary:
    """Build the capacity summary for the week containing reference.

    Blocks starting outside that week are ignored. Blocks without a user count
    toward day totals but are not listed under any user.
    """
    days = week_days(reference)
    minutes_by_day = {d: 0 for d in days}
    users: Dict[str, UserCapacity] = {}

    for block in blocks:
        day = local_day(block, tz)
        if day not in minutes_by_day:
            continue
        minutes = duration_minutes(block)
        minutes_by_day[day] += minutes

        if block.user_id is None:
            continue
        user = users.get(block.user_id)
        if user is None:
            user = UserCapacity(user_id=block.user_id, minutes_by_day={d: 0 for d in days})
            users[block.user_id] = user
        user.minutes_by_day[day] += minutes
        user.weekly_minutes += minutes

    return CapacitySummary(
        days=days,
        minutes_by_day=minutes_by_day,
        users=users,
        total_minutes=sum(minutes_by_day.values()),
    )
