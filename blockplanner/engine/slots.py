"""Picking start times for new blocks."""

import math
from datetime import date, datetime, time, timedelta
from typing import Union

from blockplanner.engine.geometry import TimeGeometry, clamp, snap_minutes, to_local
from blockplanner.engine.week_range import week_days
from blockplanner.models.constants import NEW_BLOCK_DURATION_MINUTES, NEW_BLOCK_ROUNDING_MINUTES
from blockplanner.models.grid import GridConfig
from blockplanner.models.interaction import TimeRange


def round_to_interval(dt: datetime, minutes: int) -> datetime:
    """Round to the nearest multiple of `minutes` within the hour (seconds count).

    Args:
        dt: Datetime to round
        minutes: Interval in minutes

    Returns:
        Rounded datetime (may roll over into the next hour)
    """
    within_hour = dt.minute + (dt.second + dt.microsecond / 1_000_000) / 60
    base = dt.replace(minute=0, second=0, microsecond=0)
    return base + timedelta(minutes=snap_minutes(within_hour, minutes))


def slot_at(config: GridConfig, week_reference: Union[date, datetime], x: float, y: float) -> datetime:
    """Start time for a click on empty grid space, snapped to the interval.

    Returned in the grid zone.
    """
    if isinstance(week_reference, datetime):
        week_reference = to_local(week_reference, config.tzinfo)
    day = week_days(week_reference)[config.day_index_at(x)]
    geometry = TimeGeometry.from_config(config)

    total = geometry.y_to_minutes_from_start(config.content_y(y))
    total = clamp(total, 0, config.grid_minutes - 1)
    hours = math.floor(total / 60) + config.start_hour
    minutes = snap_minutes(math.floor(total % 60), config.snap_interval_minutes)

    midnight = datetime.combine(day, time(0), tzinfo=config.tzinfo)
    return midnight + timedelta(hours=hours, minutes=minutes)


def default_new_block_range(
    now: datetime,
    rounding_minutes: int = NEW_BLOCK_ROUNDING_MINUTES,
    duration_minutes: int = NEW_BLOCK_DURATION_MINUTES,
) -> TimeRange:
    """Range prefilled by the "new block" action: the half hour after now, one hour long."""
    start = round_to_interval(now + timedelta(minutes=rounding_minutes), rounding_minutes)
    return TimeRange(start=start, end=start + timedelta(minutes=duration_minutes))
