"""blockplanner: weekly work-block planner engine."""

__version__ = "0.1.0"
