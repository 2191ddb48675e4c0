"""Tests for environment-driven grid configuration."""

import pytest
from pydantic import ValidationError

from blockplanner.config import grid_config_from_env, parse_secondary_timezones
from blockplanner.models.grid import GridConfig

_PLANNER_VARS = [
    "PLANNER_START_HOUR",
    "PLANNER_END_HOUR",
    "PLANNER_PIXELS_PER_HOUR",
    "PLANNER_SNAP_MINUTES",
    "PLANNER_MIN_BLOCK_HEIGHT_PX",
    "PLANNER_COLUMN_WIDTH",
    "PLANNER_TIMEZONE",
    "PLANNER_SECONDARY_TIMEZONES",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in _PLANNER_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = grid_config_from_env()
    assert (config.start_hour, config.end_hour) == (6, 22)
    assert config.pixels_per_hour == 60
    assert config.snap_interval_minutes == 15
    assert config.timezone == "UTC"
    assert config.gutter_width == 70


def test_env_overrides(clean_env):
    clean_env.setenv("PLANNER_START_HOUR", "8")
    clean_env.setenv("PLANNER_END_HOUR", "18")
    clean_env.setenv("PLANNER_SNAP_MINUTES", "30")
    clean_env.setenv("PLANNER_TIMEZONE", "Europe/Lisbon")
    clean_env.setenv("PLANNER_SECONDARY_TIMEZONES", "NY=America/New_York")

    config = grid_config_from_env()

    assert config.grid_minutes == 600
    assert config.snap_interval_minutes == 30
    assert [tz.label for tz in config.timezone_labels] == ["Local", "NY"]
    assert config.gutter_width == 120


def test_parse_secondary_timezones():
    labels = parse_secondary_timezones(" BR = America/Sao_Paulo , Asia/Tokyo ,, ")
    assert [(l.label, l.timezone) for l in labels] == [
        ("BR", "America/Sao_Paulo"),
        ("Asia/Tokyo", "Asia/Tokyo"),
    ]
    assert parse_secondary_timezones("") == []


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        GridConfig(timezone="Mars/Olympus_Mons")


def test_inverted_window_rejected():
    with pytest.raises(ValidationError):
        GridConfig(start_hour=18, end_hour=8)


def test_day_index_at_is_clamped():
    config = GridConfig()
    assert config.day_index_at(0) == 0
    assert config.day_index_at(70 + 160 * 3 + 1) == 3
    assert config.day_index_at(10_000) == 6
