"""Time gutter labels and the current-time indicator.

Secondary zones are display-only; stored timestamps are absolute instants and
never depend on them.
"""

from datetime import date, datetime, time
from typing import List, Optional, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from blockplanner.engine.geometry import TimeGeometry, to_local
from blockplanner.engine.week_range import week_days
from blockplanner.models.grid import GridConfig


class HourLabel(BaseModel):
    timezone_label: str
    text: str


class HourLabelRow(BaseModel):
    """Labels for one grid hour, one per configured zone."""

    hour: int
    top: float
    labels: List[HourLabel]


class NowIndicator(BaseModel):
    day_index: int
    top: float  # offset from the top of the grid body


def format_hour(dt: datetime) -> str:
    """24h label; minutes shown only for zones with a non-whole-hour offset."""
    if dt.minute == 0:
        return f"{dt.hour:02d}"
    return f"{dt.hour:02d}:{dt.minute:02d}"


def hour_labels(config: GridConfig, on: date) -> List[HourLabelRow]:
    """Gutter labels for every grid hour of `on`, converted into each zone."""
    geometry = TimeGeometry.from_config(config)
    zones = [(tz.label, ZoneInfo(tz.timezone)) for tz in config.timezone_labels]

    rows = []
    for hour in range(config.start_hour, config.end_hour):
        local = datetime.combine(on, time(hour), tzinfo=config.tzinfo)
        rows.append(
            HourLabelRow(
                hour=hour,
                top=geometry.time_to_y(local),
                labels=[HourLabel(timezone_label=label, text=format_hour(local.astimezone(zone))) for label, zone in zones],
            )
        )
    return rows


def now_indicator(
    config: GridConfig,
    reference: Union[date, datetime],
    now: datetime,
) -> Optional[NowIndicator]:
    """Where to draw the current-time line, or None when now is off-grid."""
    local_now = to_local(now, config.tzinfo)
    if isinstance(reference, datetime):
        reference = to_local(reference, config.tzinfo)
    days = week_days(reference)
    if local_now.date() not in days:
        return None
    if not (config.start_hour <= local_now.hour < config.end_hour):
        return None
    return NowIndicator(
        day_index=days.index(local_now.date()),
        top=TimeGeometry.from_config(config).time_to_y(local_now),
    )
