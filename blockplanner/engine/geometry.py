"""Time/pixel geometry for the week grid.

Maps wall-clock times inside the daily grid window (start_hour..end_hour) to
vertical pixel offsets and back. Everything here is pure.
"""

import math
from datetime import datetime, time, timedelta, tzinfo
from typing import Union

from blockplanner.models.grid import GridConfig

TimeLike = Union[datetime, time]


def to_local(dt: datetime, tz: tzinfo) -> datetime:
    """Express an aware datetime in the grid zone; naive values are already wall-clock."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz)


def snap_minutes(minutes: float, interval: int) -> int:
    """Round to the nearest multiple of interval (ties round up)."""
    return int(math.floor(minutes / interval + 0.5)) * interval


def clamp(value, lower, upper):
    return max(lower, min(upper, value))


class TimeGeometry:
    """Converts between time of day and pixel offsets for one grid window."""

    def __init__(self, start_hour: int, end_hour: int, pixels_per_hour: float):
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.pixels_per_hour = pixels_per_hour

    @classmethod
    def from_config(cls, config: GridConfig) -> "TimeGeometry":
        return cls(config.start_hour, config.end_hour, config.pixels_per_hour)

    @property
    def grid_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60

    @property
    def total_height(self) -> float:
        return (self.end_hour - self.start_hour) * self.pixels_per_hour

    def minutes_from_start(self, t: TimeLike) -> int:
        """Minutes between the grid start and t's hour:minute (seconds ignored)."""
        return (t.hour - self.start_hour) * 60 + t.minute

    def time_to_y(self, t: TimeLike) -> float:
        """Vertical offset of a time of day. Times outside the window are not clamped."""
        return self.minutes_to_y(self.minutes_from_start(t))

    def minutes_to_y(self, minutes: float) -> float:
        return minutes / 60 * self.pixels_per_hour

    def y_to_minutes_from_start(self, y: float) -> float:
        """Inverse of time_to_y; not rounded."""
        return y / self.pixels_per_hour * 60

    def duration_to_height(self, start: datetime, end: datetime) -> float:
        hours = (end - start) / timedelta(hours=1)
        return max(0.0, hours * self.pixels_per_hour)
