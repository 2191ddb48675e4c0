"""Grid geometry configuration for blockplanner.

A GridConfig is computed once per layout pass and handed to both the layout
engine and the interaction controller, so neither has to discover geometry
from the rendered page.
"""

import math
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from blockplanner.models.constants import (
    DAYS_PER_WEEK,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_END_HOUR,
    DEFAULT_HEADER_HEIGHT,
    DEFAULT_PIXELS_PER_HOUR,
    DEFAULT_SNAP_INTERVAL_MINUTES,
    DEFAULT_START_HOUR,
    DEFAULT_TIMEZONE,
    DRAG_DEAD_ZONE_PX,
    GUTTER_PADDING,
    MIN_BLOCK_HEIGHT_PX,
    TIMEZONE_LABEL_WIDTH,
)


def _validate_zone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e
    return name


class TimeZoneLabel(BaseModel):
    """A labelled timezone column in the time gutter (display only)."""

    model_config = ConfigDict(frozen=True)

    label: str
    timezone: str

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        return _validate_zone(v)


class GridConfig(BaseModel):
    """Pixel geometry and interaction settings for one week grid."""

    model_config = ConfigDict(frozen=True)

    start_hour: int = Field(DEFAULT_START_HOUR, ge=0, le=23, description="First visible hour")
    end_hour: int = Field(DEFAULT_END_HOUR, ge=1, le=24, description="End of the visible window (exclusive)")
    pixels_per_hour: int = Field(DEFAULT_PIXELS_PER_HOUR, gt=0)
    snap_interval_minutes: int = Field(DEFAULT_SNAP_INTERVAL_MINUTES, gt=0, le=60)
    min_block_height_px: int = Field(MIN_BLOCK_HEIGHT_PX, ge=0)
    column_width: float = Field(DEFAULT_COLUMN_WIDTH, gt=0, description="Width of one day column")
    gutter_width: Optional[float] = Field(
        None, ge=0, description="Width of the time gutter; derived from the timezone count when omitted"
    )
    header_height: float = Field(DEFAULT_HEADER_HEIGHT, ge=0, description="Height of the day header row")
    drag_dead_zone_px: float = Field(DRAG_DEAD_ZONE_PX, ge=0)
    timezone: str = Field(DEFAULT_TIMEZONE, description="Zone used for day columns and wall-clock hours")
    secondary_timezones: List[TimeZoneLabel] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        return _validate_zone(v)

    @model_validator(mode="after")
    def _window_and_gutter(self):
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be greater than start_hour")
        if self.gutter_width is None:
            width = len(self.timezone_labels) * TIMEZONE_LABEL_WIDTH + GUTTER_PADDING
            object.__setattr__(self, "gutter_width", float(width))
        return self

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def timezone_labels(self) -> List[TimeZoneLabel]:
        """Local zone first, then the secondary zones in configured order."""
        return [TimeZoneLabel(label="Local", timezone=self.timezone)] + list(self.secondary_timezones)

    @property
    def grid_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60

    @property
    def grid_height(self) -> float:
        return (self.end_hour - self.start_hour) * self.pixels_per_hour

    def column_x(self, day_index: int) -> float:
        """Absolute x of the left edge of a day column."""
        return self.gutter_width + day_index * self.column_width

    def day_index_at(self, x: float) -> int:
        """Day column under an absolute x, clamped to Monday..Sunday."""
        idx = math.floor((x - self.gutter_width) / self.column_width)
        return max(0, min(DAYS_PER_WEEK - 1, idx))

    def content_y(self, y: float) -> float:
        """Convert an absolute y to an offset below the header row."""
        return y - self.header_height
