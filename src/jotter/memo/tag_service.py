"""Tag usage counts and bulk tag rewrites.

Rewrites edit memo bodies one record at a time through `MemoStore.update`.
They are not atomic: a failure on one memo is recorded in the report and
the remaining memos are still processed.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from jotter.memo.query import SearchQuery
from jotter.memo.store import MemoStore, MemoStoreError
from jotter.memo.tagging import replace_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagCount:
    name: str
    count: int


@dataclass
class TagRewriteReport:
    """Outcome of a bulk rewrite: ids written and ids that failed (with reason)."""

    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.updated)

    @property
    def ok(self) -> bool:
        return not self.failed

    def merge(self, other: TagRewriteReport) -> None:
        self.updated.extend(other.updated)
        self.failed.update(other.failed)


class TagService:
    def __init__(self, store: MemoStore) -> None:
        self.store = store

    async def all_tags(self) -> list[TagCount]:
        """Every tag with its memo count, most used first."""
        counts: Counter[str] = Counter()
        for memo in await self.store.list_all():
            counts.update(memo.tags)
        # Counter keeps first-seen order; sorted() is stable on ties.
        return [
            TagCount(name, n)
            for name, n in sorted(counts.items(), key=lambda item: item[1], reverse=True)
        ]

    async def popular_tags(self, limit: int = 10) -> list[TagCount]:
        return (await self.all_tags())[: max(limit, 0)]

    async def rename_tag(self, old: str, new: str) -> TagRewriteReport:
        if old == new:
            return TagRewriteReport()
        report = await self._rewrite(old, new)
        logger.info("Renamed tag #%s -> #%s in %d memos", old, new, report.count)
        return report

    async def delete_tag(self, name: str) -> TagRewriteReport:
        report = await self._rewrite(name, "")
        logger.info("Removed tag #%s from %d memos", name, report.count)
        return report

    async def merge_tags(self, names: Iterable[str], target: str) -> TagRewriteReport:
        report = TagRewriteReport()
        for name in names:
            if name != target:
                report.merge(await self.rename_tag(name, target))
        return report

    async def _rewrite(self, old: str, new: str) -> TagRewriteReport:
        # Collect the affected set before writing anything.
        affected = await self.store.search(SearchQuery(tags=[old]))
        report = TagRewriteReport()

        for memo in affected:
            content = replace_tag(memo.content, old, new)
            if content == memo.content:
                continue
            try:
                result = await self.store.update(memo.id, content)
            except MemoStoreError as e:
                logger.error("Failed to rewrite #%s in memo %s: %s", old, memo.id, e)
                report.failed[memo.id] = str(e)
                continue
            if result is None:
                report.failed[memo.id] = "not found"
            else:
                report.updated.append(memo.id)
        return report
