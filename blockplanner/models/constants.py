"""Constants for blockplanner.

This module centralizes all magic numbers and default values used throughout the application.
"""

# Grid window
DEFAULT_START_HOUR = 6
DEFAULT_END_HOUR = 22
DEFAULT_PIXELS_PER_HOUR = 60

# Interaction
DEFAULT_SNAP_INTERVAL_MINUTES = 15
DRAG_DEAD_ZONE_PX = 4  # Manhattan distance before a press becomes a drag

# Rendering
MIN_BLOCK_HEIGHT_PX = 40
DEFAULT_COLUMN_WIDTH = 160
DEFAULT_HEADER_HEIGHT = 60
TIMEZONE_LABEL_WIDTH = 50  # per timezone column in the gutter, local zone included
GUTTER_PADDING = 20

# Week
DAYS_PER_WEEK = 7
DEFAULT_TIMEZONE = "UTC"

# New blocks
NEW_BLOCK_ROUNDING_MINUTES = 30
NEW_BLOCK_DURATION_MINUTES = 60
