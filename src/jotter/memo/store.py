"""Memo store — one markdown file per memo in a flat notes folder.

Files are the source of truth and nothing is cached: every read re-parses
the file. Blocking filesystem calls run in a worker thread so the store can
be awaited from an event loop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

from jotter.memo.codec import decode, encode
from jotter.memo.naming import (
    MEMO_SUFFIX,
    file_name,
    is_memo_file_name,
    now_ms,
    parse_file_name,
)
from jotter.memo.query import SearchQuery, SortKey, filter_memos, sort_memos
from jotter.memo.record import MemoRecord
from jotter.memo.tagging import extract_tags

logger = logging.getLogger(__name__)


class MemoStoreError(Exception):
    """Base class for memo store errors."""


class StorageFailure(MemoStoreError):
    """The filesystem refused a folder creation, write or delete."""


class MemoStore:
    """Create, read, update, delete and list memos under `root`."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    # ── Initialization ───────────────────────────────────────

    async def initialize(self) -> None:
        """Ensure the notes folder exists. Idempotent."""
        try:
            await asyncio.to_thread(self.root.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise StorageFailure(f"Cannot create notes folder {self.root}: {e}") from e

    # ── File access (blocking, run via to_thread) ────────────

    def _memo_files(self) -> list[Path]:
        if not self.root.is_dir():
            logger.debug("Notes folder %s does not exist", self.root)
            return []
        return sorted(p for p in self.root.iterdir() if p.suffix == MEMO_SUFFIX and p.is_file())

    def _read(self, path: Path) -> MemoRecord:
        ident = parse_file_name(path.name)
        record = decode(path.read_text(encoding="utf-8"), ident.id, ident.created_at)
        if is_memo_file_name(path.name):
            # The name is the identity; a front-matter id can't override it.
            record.id = ident.id
        record.linked_file = path
        return record

    def _resolve(self, memo_id: str) -> Path | None:
        """Find the file backing `memo_id` by exact id match.

        Conforming names are matched on the id they encode. Files with other
        names are only addressable through the `id` in their front matter.
        """
        if not memo_id:
            return None
        files = self._memo_files()
        by_name = {
            parse_file_name(p.name).id: p for p in files if is_memo_file_name(p.name)
        }
        if memo_id in by_name:
            return by_name[memo_id]

        for path in files:
            if is_memo_file_name(path.name):
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, ValueError):
                continue
            if decode(text, "", 0).id == memo_id:
                return path
        return None

    def _write_new(self, content: str, created_at: int) -> MemoRecord:
        # Exclusive create; a taken millisecond moves the id forward.
        while True:
            record = MemoRecord(
                id=str(created_at),
                content=content.strip(),
                created_at=created_at,
                updated_at=created_at,
                tags=extract_tags(content),
            )
            path = self.root / file_name(created_at)
            try:
                with path.open("x", encoding="utf-8") as f:
                    f.write(encode(record))
                return record
            except FileExistsError:
                created_at += 1

    def _load_all(self) -> list[MemoRecord]:
        memos: list[MemoRecord] = []
        for path in self._memo_files():
            try:
                memos.append(self._read(path))
            except (OSError, ValueError) as e:
                logger.warning("Skipping unreadable memo file %s: %s", path.name, e)
        return memos

    # ── CRUD ─────────────────────────────────────────────────

    async def create(self, content: str) -> MemoRecord:
        """Write a new memo. The returned record has no `linked_file`."""
        try:
            record = await asyncio.to_thread(self._write_new, content, now_ms())
        except OSError as e:
            raise StorageFailure(f"Cannot create memo in {self.root}: {e}") from e
        logger.info("Created memo %s (%d tags)", record.id, len(record.tags))
        return record

    async def get_by_id(self, memo_id: str) -> MemoRecord | None:
        path = await asyncio.to_thread(self._resolve, memo_id)
        if path is None:
            logger.debug("Memo %s not found", memo_id)
            return None
        try:
            return await asyncio.to_thread(self._read, path)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise StorageFailure(f"Cannot read memo {memo_id} from {path}: {e}") from e

    async def update(self, memo_id: str, content: str) -> MemoRecord | None:
        """Overwrite a memo's content in place. None if the memo doesn't exist."""
        memo = await self.get_by_id(memo_id)
        if memo is None or memo.linked_file is None:
            return None

        updated = replace(
            memo,
            content=content.strip(),
            updated_at=max(now_ms(), memo.updated_at),
            tags=extract_tags(content),
        )
        try:
            await asyncio.to_thread(
                memo.linked_file.write_text, encode(updated), encoding="utf-8"
            )
        except OSError as e:
            raise StorageFailure(f"Cannot write memo {memo_id}: {e}") from e
        logger.info("Updated memo %s", memo_id)
        return updated

    async def delete(self, memo_id: str) -> bool:
        """Remove a memo's file. False if there was nothing to remove."""
        path = await asyncio.to_thread(self._resolve, memo_id)
        if path is None:
            return False
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageFailure(f"Cannot delete memo {memo_id}: {e}") from e
        logger.info("Deleted memo %s", memo_id)
        return True

    # ── Listing & search ─────────────────────────────────────

    async def list_all(
        self,
        limit: int | None = None,
        sort_key: SortKey = "created_at",
    ) -> list[MemoRecord]:
        """All readable memos, newest first by `sort_key`, at most `limit`."""
        memos = sort_memos(await asyncio.to_thread(self._load_all), sort_key)
        if limit is not None:
            memos = memos[: max(limit, 0)]
        return memos

    async def search(self, query: SearchQuery) -> list[MemoRecord]:
        return filter_memos(await self.list_all(), query)
