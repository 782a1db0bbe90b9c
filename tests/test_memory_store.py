"""
Blog API — Post Store Unit Tests (Null & In-Memory)
=====================================================

What:  Tests for NullPostStore and InMemoryPostStore against the PostStore
       contract: paging, upsert semantics, removal, cancellation.
"""

import asyncio

import pytest

from blog_api.exceptions import StoreError
from blog_api.schemas.post import PostUpdate
from blog_api.services.post_store import NullPostStore, page_bounds


class TestNullPostStore:

    def setup_method(self):
        self.store = NullPostStore()

    @pytest.mark.asyncio
    async def test_reads_are_empty(self):
        assert await self.store.list(0) == []
        assert await self.store.find("abc") is None
        assert await self.store.remove("abc") is False

    @pytest.mark.asyncio
    async def test_upsert_fails(self, sample_update):
        with pytest.raises(StoreError, match="No post store"):
            await self.store.upsert("abc", sample_update)

    @pytest.mark.asyncio
    async def test_health_check(self):
        assert await self.store.health_check() is True
        assert self.store.backend_name == "none"


class TestPageBounds:

    def test_first_page(self):
        assert page_bounds(0, 20) == (0, 20)

    def test_later_page(self):
        assert page_bounds(3, 5) == (15, 5)

    def test_negative_page_rejected(self):
        with pytest.raises(ValueError):
            page_bounds(-1, 20)


class TestInMemoryPostStore:

    @pytest.mark.asyncio
    async def test_upsert_creates(self, memory_store, sample_update):
        post = await memory_store.upsert("abc", sample_update)

        assert post.id == "abc"
        assert post.created_at == post.updated_at
        assert await memory_store.find("abc") == post
        assert len(memory_store) == 1

    @pytest.mark.asyncio
    async def test_upsert_replaces_fields(self, memory_store, sample_update):
        created = await memory_store.upsert("abc", sample_update)
        updated = await memory_store.upsert(
            "abc", PostUpdate(title="Second", content="Other", author=None)
        )

        assert updated.title == "Second"
        assert updated.author is None
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at
        assert len(memory_store) == 1

    @pytest.mark.asyncio
    async def test_identical_upsert_leaves_post_unchanged(self, memory_store, sample_update):
        first = await memory_store.upsert("abc", sample_update)
        second = await memory_store.upsert("abc", sample_update)

        assert second == first

    @pytest.mark.asyncio
    async def test_list_newest_first_and_paged(self, memory_store, sample_update):
        for post_id in ["p1", "p2", "p3", "p4", "p5"]:
            await memory_store.upsert(post_id, sample_update)

        page0 = await memory_store.list(0)
        page1 = await memory_store.list(1)
        page2 = await memory_store.list(2)

        assert [s.id for s in page0] == ["p5", "p4", "p3"]
        assert [s.id for s in page1] == ["p2", "p1"]
        assert page2 == []

    @pytest.mark.asyncio
    async def test_list_summary_fields(self, memory_store, sample_update):
        post = await memory_store.upsert("abc", sample_update)

        [summary] = await memory_store.list(0)

        assert summary.id == "abc"
        assert summary.title == post.title
        assert summary.author == post.author
        assert summary.created_at == post.created_at

    @pytest.mark.asyncio
    async def test_update_does_not_reorder_listing(self, memory_store, sample_update):
        await memory_store.upsert("old", sample_update)
        await memory_store.upsert("new", sample_update)
        await memory_store.upsert("old", PostUpdate(title="Edited"))

        assert [s.id for s in await memory_store.list(0)] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_list_negative_page_rejected(self, memory_store):
        with pytest.raises(ValueError):
            await memory_store.list(-1)

    @pytest.mark.asyncio
    async def test_remove(self, memory_store, sample_update):
        await memory_store.upsert("abc", sample_update)

        assert await memory_store.remove("abc") is True
        assert await memory_store.remove("abc") is False
        assert await memory_store.find("abc") is None

    @pytest.mark.asyncio
    async def test_cancelled_write_has_no_effect(self, memory_store, sample_update):
        """A write cancelled while waiting for its id's lock never commits."""
        async with memory_store._locks.hold("abc"):
            task = asyncio.create_task(memory_store.upsert("abc", sample_update))
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert await memory_store.find("abc") is None
        assert len(memory_store._locks) == 0
