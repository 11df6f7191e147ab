"""Display-side date helpers. All inputs and outputs are epoch millis, local time."""

from __future__ import annotations

from datetime import datetime, timedelta

MINUTE = 60 * 1000
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY


def _to_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def format_date(ms: int, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    return datetime.fromtimestamp(ms / 1000).strftime(fmt)


def today_range(now: datetime | None = None) -> tuple[int, int]:
    """Start and end (inclusive, last millisecond) of the local day."""
    now = now or datetime.now()
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return _to_ms(start), _to_ms(start + timedelta(days=1)) - 1


def week_start(now: datetime | None = None) -> int:
    """Monday 00:00 of the current local week."""
    now = now or datetime.now()
    monday = now - timedelta(days=now.weekday())
    return _to_ms(monday.replace(hour=0, minute=0, second=0, microsecond=0))


def relative_time(ms: int, now: int | None = None) -> str:
    """Short human description, e.g. "5分钟前". Older than a week -> YYYY-MM-DD."""
    if now is None:
        now = _to_ms(datetime.now())
    diff = now - ms

    if diff < MINUTE:
        return "刚刚"
    if diff < HOUR:
        return f"{diff // MINUTE}分钟前"
    if diff < DAY:
        return f"{diff // HOUR}小时前"
    if diff < WEEK:
        return f"{diff // DAY}天前"
    return format_date(ms, "%Y-%m-%d")
