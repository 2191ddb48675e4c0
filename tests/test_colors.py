"""Tests for block colors and status markers."""

from blockplanner.engine.colors import (
    DEFAULT_TYPE_COLOR,
    NEUTRAL_COLOR,
    PROJECT_PALETTE,
    block_color,
    hash_string,
    project_color,
    status_marker,
)
from blockplanner.models.work_block import WorkBlockStatus, WorkBlockType


def test_hash_string_matches_31_multiplier_hash():
    assert hash_string("") == 0
    assert hash_string("a") == 97
    assert hash_string("abc") == 96354


def test_hash_string_is_never_negative():
    # Overflows into the negative 32-bit range before abs()
    assert hash_string("project-with-a-long-identifier-0001") >= 0


def test_project_color_is_stable():
    assert project_color("p-42") == project_color("p-42")
    assert project_color("p-42") in PROJECT_PALETTE
    assert project_color(None) == NEUTRAL_COLOR
    assert project_color("") == NEUTRAL_COLOR


def test_block_color(make_block):
    assert block_color(make_block("09:00", "10:00", type=WorkBlockType.MEETING)) == "#3b82f6"
    assert block_color(make_block("09:00", "10:00")) == DEFAULT_TYPE_COLOR
    assert block_color(make_block("09:00", "10:00", type=WorkBlockType.FOCUS, color="#123456")) == "#123456"


def test_status_marker():
    assert status_marker(WorkBlockStatus.CONFIRMED) == "✓"
    assert status_marker(WorkBlockStatus.COMPLETED) == "✓"
    assert status_marker(WorkBlockStatus.CANCELLED) == "✕"
    assert status_marker(WorkBlockStatus.PLANNED) is None
