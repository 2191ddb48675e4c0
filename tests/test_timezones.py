"""Tests for gutter hour labels and the now indicator."""

from datetime import date, datetime, timezone

from blockplanner.config import parse_secondary_timezones
from blockplanner.engine.timezones import format_hour, hour_labels, now_indicator
from blockplanner.models.grid import GridConfig


def _config(**kwargs):
    return GridConfig(
        secondary_timezones=parse_secondary_timezones("BR=America/Sao_Paulo,IN=Asia/Kolkata"),
        **kwargs,
    )


class TestHourLabels:
    """Test hour_labels() across zones."""

    def test_one_row_per_grid_hour(self):
        rows = hour_labels(_config(), date(2024, 1, 15))
        assert [r.hour for r in rows] == list(range(6, 22))
        assert rows[0].top == 0
        assert rows[1].top == 60

    def test_labels_in_each_zone(self):
        row = hour_labels(_config(), date(2024, 1, 15))[3]  # 09:00 UTC

        assert [label.timezone_label for label in row.labels] == ["Local", "BR", "IN"]
        assert [label.text for label in row.labels] == ["09", "06", "14:30"]

    def test_local_zone_drives_the_rows(self):
        rows = hour_labels(_config(timezone="America/New_York"), date(2024, 1, 15))
        assert rows[0].labels[0].text == "06"
        # 06:00 New York is 08:00 in Sao Paulo in January
        assert rows[0].labels[1].text == "08"


def test_format_hour():
    assert format_hour(datetime(2024, 1, 15, 9, 0)) == "09"
    assert format_hour(datetime(2024, 1, 15, 14, 30)) == "14:30"


class TestNowIndicator:
    """Test now_indicator() placement."""

    def test_inside_grid(self):
        now = datetime(2024, 1, 17, 10, 30, tzinfo=timezone.utc)
        indicator = now_indicator(GridConfig(), date(2024, 1, 15), now)
        assert indicator.day_index == 2
        assert indicator.top == 270

    def test_outside_hours(self):
        now = datetime(2024, 1, 17, 23, 0, tzinfo=timezone.utc)
        assert now_indicator(GridConfig(), date(2024, 1, 15), now) is None

    def test_other_week(self):
        now = datetime(2024, 1, 24, 10, 0, tzinfo=timezone.utc)
        assert now_indicator(GridConfig(), date(2024, 1, 15), now) is None

    def test_uses_grid_zone(self):
        config = GridConfig(timezone="America/New_York")
        # 15:00 UTC is 10:00 in New York
        now = datetime(2024, 1, 15, 15, 0, tzinfo=timezone.utc)
        indicator = now_indicator(config, date(2024, 1, 15), now)
        assert indicator.day_index == 0
        assert indicator.top == 240
