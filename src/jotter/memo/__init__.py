"""Memo persistence and query engine.

Layout:
    ~/.jotter/memos/
    ├── memo-1714552200123.md          # One memo per file, front matter + body
    └── memo-1714552260456.md

File names carry the creation timestamp (epoch millis), which doubles as the
memo id. Tags are `#word` tokens in the body and are re-derived on every read.
"""

from jotter.memo.query import SearchQuery, SortKey, TimeRange
from jotter.memo.record import MemoRecord
from jotter.memo.store import MemoStore, MemoStoreError, StorageFailure
from jotter.memo.tag_service import TagCount, TagRewriteReport, TagService

__all__ = [
    "MemoRecord",
    "MemoStore",
    "MemoStoreError",
    "SearchQuery",
    "SortKey",
    "StorageFailure",
    "TagCount",
    "TagRewriteReport",
    "TagService",
    "TimeRange",
]
