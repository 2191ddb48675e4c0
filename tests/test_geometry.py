"""Tests for time/pixel geometry."""

import pytest
from datetime import datetime, time

from blockplanner.engine.geometry import TimeGeometry, clamp, snap_minutes, to_local
from blockplanner.models.grid import GridConfig


class TestTimeGeometry:
    """Test TimeGeometry conversions on the default 06:00-22:00 grid."""

    @pytest.fixture
    def geometry(self):
        return TimeGeometry(start_hour=6, end_hour=22, pixels_per_hour=60)

    def test_eight_to_nine_block_position(self, geometry):
        """An 08:00-09:00 block sits 120px down and is 60px tall."""
        start = datetime(2024, 1, 15, 8, 0)
        end = datetime(2024, 1, 15, 9, 0)

        assert geometry.time_to_y(start) == 120
        assert geometry.duration_to_height(start, end) == 60

    def test_grid_start_is_zero(self, geometry):
        assert geometry.time_to_y(time(6, 0)) == 0

    def test_total_height(self, geometry):
        assert geometry.total_height == 16 * 60
        assert geometry.grid_minutes == 16 * 60

    def test_seconds_are_ignored(self, geometry):
        assert geometry.minutes_from_start(time(9, 30, 59)) == 210

    def test_times_before_grid_are_negative(self, geometry):
        """time_to_y does not clamp; callers decide."""
        assert geometry.time_to_y(time(5, 0)) == -60

    def test_y_to_minutes_inverts_time_to_y(self, geometry):
        for t in (time(6, 0), time(7, 15), time(13, 45), time(21, 59)):
            y = geometry.time_to_y(t)
            assert geometry.y_to_minutes_from_start(y) == pytest.approx(geometry.minutes_from_start(t))

    def test_scales_with_pixels_per_hour(self):
        geometry = TimeGeometry(start_hour=8, end_hour=18, pixels_per_hour=48)
        assert geometry.time_to_y(time(9, 30)) == 72
        assert geometry.total_height == 480

    def test_negative_duration_has_zero_height(self, geometry):
        start = datetime(2024, 1, 15, 10, 0)
        assert geometry.duration_to_height(start, datetime(2024, 1, 15, 9, 0)) == 0

    def test_from_config(self):
        config = GridConfig(start_hour=7, end_hour=19, pixels_per_hour=80)
        geometry = TimeGeometry.from_config(config)
        assert (geometry.start_hour, geometry.end_hour, geometry.pixels_per_hour) == (7, 19, 80)


class TestSnapMinutes:
    """Test snap_minutes() rounding."""

    def test_rounds_to_nearest(self):
        assert snap_minutes(7, 15) == 0
        assert snap_minutes(8, 15) == 15
        assert snap_minutes(22, 15) == 15
        assert snap_minutes(23, 15) == 30

    def test_ties_round_up(self):
        assert snap_minutes(7.5, 15) == 15
        assert snap_minutes(-7.5, 15) == 0

    def test_negative_values(self):
        assert snap_minutes(-20, 15) == -15

    def test_idempotent(self):
        for raw in range(-120, 1000, 7):
            once = snap_minutes(raw, 15)
            assert snap_minutes(once, 15) == once
            assert once % 15 == 0


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_to_local_keeps_naive_values():
    from zoneinfo import ZoneInfo

    naive = datetime(2024, 1, 15, 9, 0)
    assert to_local(naive, ZoneInfo("America/New_York")) is naive

    aware = datetime(2024, 1, 15, 14, 0, tzinfo=ZoneInfo("UTC"))
    local = to_local(aware, ZoneInfo("America/New_York"))
    assert (local.hour, local.minute) == (9, 0)
