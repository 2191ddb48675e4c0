"""Tests for weekly capacity totals."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from blockplanner.engine.capacity import duration_minutes, format_hours, summarize_capacity
from blockplanner.models.work_block import WorkBlock

UTC = ZoneInfo("UTC")


class TestSummarizeCapacity:
    """Test summarize_capacity() aggregation."""

    def test_totals_per_day_and_user(self, make_block, monday):
        tuesday = monday + timedelta(days=1)
        blocks = [
            make_block("09:00", "10:00", user_id="u1"),
            make_block("13:00", "14:30", user_id="u2"),
            make_block("09:00", "11:00", day=tuesday),
            make_block("15:00", "15:45", day=tuesday, user_id="u1"),
        ]

        summary = summarize_capacity(blocks, monday, UTC)

        assert summary.days[0] == monday
        assert summary.minutes_by_day[monday] == 150
        assert summary.minutes_by_day[tuesday] == 165
        assert summary.total_minutes == 315
        assert summary.users["u1"].weekly_minutes == 105
        assert summary.users["u1"].minutes_by_day[tuesday] == 45
        assert summary.users["u2"].weekly_minutes == 90

    def test_blocks_without_user_only_count_toward_days(self, make_block, monday):
        summary = summarize_capacity([make_block("09:00", "10:00")], monday, UTC)
        assert summary.users == {}
        assert summary.total_minutes == 60

    def test_blocks_outside_week_are_ignored(self, make_block, monday):
        blocks = [
            make_block("09:00", "10:00", day=monday - timedelta(days=1), user_id="u1"),
            make_block("09:00", "10:00", day=monday + timedelta(days=7), user_id="u1"),
        ]
        summary = summarize_capacity(blocks, monday, UTC)
        assert summary.total_minutes == 0
        assert all(m == 0 for m in summary.minutes_by_day.values())
        assert summary.users == {}

    def test_every_day_present(self, monday):
        summary = summarize_capacity([], monday + timedelta(days=3), UTC)
        assert len(summary.minutes_by_day) == 7
        assert list(summary.minutes_by_day) == summary.days


class TestDurationHelpers:
    """Test minute and hour formatting helpers."""

    def test_duration_rounds_half_up(self):
        block = WorkBlock(
            start_at=datetime(2024, 1, 15, 9, 0, 0),
            end_at=datetime(2024, 1, 15, 9, 29, 30),
        )
        assert duration_minutes(block) == 30

    def test_format_hours(self):
        assert format_hours(90) == "1.5"
        assert format_hours(60, fraction_digits=0) == "1"
        assert format_hours(0) == "0.0"
        assert format_hours(20, fraction_digits=2) == "0.33"
