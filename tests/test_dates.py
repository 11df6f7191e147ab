"""Tests for display date helpers."""

from datetime import datetime

from jotter.dates import DAY, HOUR, MINUTE, format_date, relative_time, today_range, week_start


def _ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


class TestRelativeTime:
    NOW = _ms(datetime(2024, 5, 20, 12, 0))

    def test_just_now(self):
        assert relative_time(self.NOW - 30 * 1000, self.NOW) == "刚刚"

    def test_minutes(self):
        assert relative_time(self.NOW - 5 * MINUTE, self.NOW) == "5分钟前"

    def test_hours(self):
        assert relative_time(self.NOW - 3 * HOUR - 1, self.NOW) == "3小时前"

    def test_days(self):
        assert relative_time(self.NOW - 2 * DAY, self.NOW) == "2天前"

    def test_older_than_a_week(self):
        ts = _ms(datetime(2024, 5, 1, 9, 0))
        assert relative_time(ts, self.NOW) == "2024-05-01"


class TestRanges:
    def test_format_date(self):
        ts = _ms(datetime(2024, 5, 1, 8, 30, 15))
        assert format_date(ts) == "2024-05-01 08:30:15"
        assert format_date(ts, "%d/%m") == "01/05"

    def test_today_range(self):
        start, end = today_range(datetime(2024, 5, 1, 15, 45))
        assert start == _ms(datetime(2024, 5, 1))
        assert end == _ms(datetime(2024, 5, 2)) - 1

    def test_week_start_is_monday(self):
        # 2024-05-01 is a Wednesday
        assert week_start(datetime(2024, 5, 1, 15, 45)) == _ms(datetime(2024, 4, 29))
        assert week_start(datetime(2024, 4, 29, 0, 0)) == _ms(datetime(2024, 4, 29))
