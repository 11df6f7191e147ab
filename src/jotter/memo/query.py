"""In-memory filtering and sorting over materialised memos."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

from jotter.dates import today_range, week_start
from jotter.memo.record import MemoRecord

SortKey = Literal["created_at", "updated_at"]
SORT_KEYS: tuple[str, ...] = ("created_at", "updated_at")


@dataclass
class TimeRange:
    """Inclusive bounds on created_at (epoch millis). None = unbounded."""

    start: int | None = None
    end: int | None = None

    def contains(self, ts: int) -> bool:
        if self.start is not None and ts < self.start:
            return False
        if self.end is not None and ts > self.end:
            return False
        return True


@dataclass
class SearchQuery:
    """Search criteria. All set predicates must hold."""

    text: str | None = None
    tags: list[str] = field(default_factory=list)
    time_range: TimeRange | None = None

    @classmethod
    def today(cls, text: str | None = None) -> SearchQuery:
        start, end = today_range()
        return cls(text=text, time_range=TimeRange(start, end))

    @classmethod
    def this_week(cls, text: str | None = None) -> SearchQuery:
        return cls(text=text, time_range=TimeRange(start=week_start()))


def matches(record: MemoRecord, query: SearchQuery) -> bool:
    if query.text and query.text.lower() not in record.content.lower():
        return False
    if query.tags and not all(tag in record.tags for tag in query.tags):
        return False
    if query.time_range and not query.time_range.contains(record.created_at):
        return False
    return True


def filter_memos(records: Iterable[MemoRecord], query: SearchQuery) -> list[MemoRecord]:
    return [r for r in records if matches(r, query)]


def sort_memos(records: Iterable[MemoRecord], sort_key: SortKey = "created_at") -> list[MemoRecord]:
    """Newest first. Equal keys keep their input order."""
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key {sort_key!r}, expected one of {SORT_KEYS}")
    return sorted(records, key=lambda r: getattr(r, sort_key), reverse=True)
