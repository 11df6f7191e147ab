"""Tests for tag counts and bulk tag rewrites."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio

from jotter.memo.store import MemoStore, StorageFailure
from jotter.memo.tag_service import TagCount, TagService


@pytest_asyncio.fixture
async def store(tmp_path: Path, monkeypatch) -> MemoStore:
    ticks = iter(range(1000, 10**6, 10))
    monkeypatch.setattr("jotter.memo.store.now_ms", lambda: next(ticks))
    s = MemoStore(tmp_path / "memos")
    await s.initialize()
    return s


@pytest.fixture
def tags(store: MemoStore) -> TagService:
    return TagService(store)


async def _contents(store: MemoStore) -> set[str]:
    return {m.content for m in await store.list_all()}


class TestCounts:
    @pytest.mark.asyncio
    async def test_all_tags(self, store: MemoStore, tags: TagService):
        await store.create("#a #b")
        await store.create("#b")
        await store.create("#b #c")
        # Newest memo is seen first, so c precedes a on the tie.
        assert await tags.all_tags() == [TagCount("b", 3), TagCount("c", 1), TagCount("a", 1)]

    @pytest.mark.asyncio
    async def test_popular_tags(self, store: MemoStore, tags: TagService):
        await store.create("#a #b")
        await store.create("#b")
        assert await tags.popular_tags(1) == [TagCount("b", 2)]

    @pytest.mark.asyncio
    async def test_empty(self, tags: TagService):
        assert await tags.all_tags() == []
        assert await tags.popular_tags() == []


class TestRename:
    @pytest.mark.asyncio
    async def test_word_boundary(self, store: MemoStore, tags: TagService):
        memo = await store.create("#a #ab")
        report = await tags.rename_tag("a", "b")
        assert report.count == 1
        assert report.updated == [memo.id]
        fetched = await store.get_by_id(memo.id)
        assert fetched.content == "#b #ab"
        assert fetched.tags == ["b", "ab"]

    @pytest.mark.asyncio
    async def test_only_affected_memos_written(self, store: MemoStore, tags: TagService):
        await store.create("#a one")
        untouched = await store.create("#ab two")
        before = await store.get_by_id(untouched.id)
        report = await tags.rename_tag("a", "z")
        assert report.count == 1
        assert await store.get_by_id(untouched.id) == before

    @pytest.mark.asyncio
    async def test_same_name_is_noop(self, store: MemoStore, tags: TagService):
        await store.create("#a")
        report = await tags.rename_tag("a", "a")
        assert report.count == 0
        assert report.ok

    @pytest.mark.asyncio
    async def test_unknown_tag(self, store: MemoStore, tags: TagService):
        await store.create("#a")
        assert (await tags.rename_tag("missing", "x")).count == 0


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_tag(self, store: MemoStore, tags: TagService):
        await store.create("hello #x world")
        await store.create("#x")
        await store.create("#xy stays")
        report = await tags.delete_tag("x")
        assert report.count == 2
        assert await _contents(store) == {"hello  world", "", "#xy stays"}
        assert [t.name for t in await tags.all_tags()] == ["xy"]


class TestMerge:
    @pytest.mark.asyncio
    async def test_merge(self, store: MemoStore, tags: TagService):
        await store.create("#js notes")
        await store.create("#javascript notes")
        await store.create("#ecmascript")
        report = await tags.merge_tags(["js", "ecmascript", "javascript"], "javascript")
        assert report.count == 2
        assert await tags.all_tags() == [TagCount("javascript", 3)]

    @pytest.mark.asyncio
    async def test_counts_are_summed(self, store: MemoStore, tags: TagService):
        await store.create("#x #y")
        report = await tags.merge_tags(["x", "y"], "z")
        assert report.count == 2
        assert await _contents(store) == {"#z #z"}


class TestPartialFailure:
    @pytest.mark.asyncio
    async def test_failure_recorded_and_rest_processed(
        self, store: MemoStore, tags: TagService, monkeypatch
    ):
        bad = await store.create("#a bad")
        good = await store.create("#a good")
        real_update = store.update

        async def flaky_update(memo_id: str, content: str):
            if memo_id == bad.id:
                raise StorageFailure("disk full")
            return await real_update(memo_id, content)

        monkeypatch.setattr(store, "update", flaky_update)
        report = await tags.rename_tag("a", "b")

        assert report.updated == [good.id]
        assert report.failed == {bad.id: "disk full"}
        assert not report.ok
        assert (await store.get_by_id(bad.id)).content == "#a bad"
        assert (await store.get_by_id(good.id)).content == "#b good"

    @pytest.mark.asyncio
    async def test_vanished_memo_recorded(self, store: MemoStore, tags: TagService, monkeypatch):
        memo = await store.create("#a gone")

        async def vanished(memo_id: str, content: str):
            return None

        monkeypatch.setattr(store, "update", vanished)
        report = await tags.delete_tag("a")
        assert report.failed == {memo.id: "not found"}
        assert report.count == 0


class TestFrontMatterIdMismatch:
    @pytest.mark.asyncio
    async def test_rename_reaches_memo_with_stale_id(self, store: MemoStore, tags: TagService):
        (store.root / "memo-100.md").write_text("---\nid: 200\n---\n\nhi #a", encoding="utf-8")
        report = await tags.rename_tag("a", "b")
        assert report.updated == ["100"]
        assert report.ok
        assert (await store.get_by_id("100")).content == "hi #b"
