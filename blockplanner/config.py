"""Environment-driven configuration for blockplanner.

Grid settings come from PLANNER_* environment variables (a .env file is
honoured), falling back to the defaults in models.constants.
"""

import os
from typing import List

from dotenv import load_dotenv

from blockplanner.models.constants import (
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_END_HOUR,
    DEFAULT_PIXELS_PER_HOUR,
    DEFAULT_SNAP_INTERVAL_MINUTES,
    DEFAULT_START_HOUR,
    DEFAULT_TIMEZONE,
    MIN_BLOCK_HEIGHT_PX,
)
from blockplanner.models.grid import GridConfig, TimeZoneLabel

load_dotenv()


def parse_secondary_timezones(raw: str) -> List[TimeZoneLabel]:
    """Parse "BR=America/Sao_Paulo,NY=America/New_York" into labels.

    An entry without "=" uses the zone name as its label.
    """
    labels = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            label, zone = part.split("=", 1)
            labels.append(TimeZoneLabel(label=label.strip(), timezone=zone.strip()))
        else:
            labels.append(TimeZoneLabel(label=part, timezone=part))
    return labels


def grid_config_from_env() -> GridConfig:
    """Build the GridConfig for the running service."""
    return GridConfig(
        start_hour=int(os.getenv("PLANNER_START_HOUR", str(DEFAULT_START_HOUR))),
        end_hour=int(os.getenv("PLANNER_END_HOUR", str(DEFAULT_END_HOUR))),
        pixels_per_hour=int(os.getenv("PLANNER_PIXELS_PER_HOUR", str(DEFAULT_PIXELS_PER_HOUR))),
        snap_interval_minutes=int(os.getenv("PLANNER_SNAP_MINUTES", str(DEFAULT_SNAP_INTERVAL_MINUTES))),
        min_block_height_px=int(os.getenv("PLANNER_MIN_BLOCK_HEIGHT_PX", str(MIN_BLOCK_HEIGHT_PX))),
        column_width=float(os.getenv("PLANNER_COLUMN_WIDTH", str(DEFAULT_COLUMN_WIDTH))),
        timezone=os.getenv("PLANNER_TIMEZONE", DEFAULT_TIMEZONE),
        secondary_timezones=parse_secondary_timezones(os.getenv("PLANNER_SECONDARY_TIMEZONES", "")),
    )
