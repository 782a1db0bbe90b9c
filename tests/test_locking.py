"""
Blog API — KeyedLock Unit Tests
=================================

What:  Same key serializes, different keys overlap, entries are cleaned up.
"""

import asyncio

import pytest

from blog_api.services.locking import KeyedLock


async def _critical_section(locks, key, log, name):
    async with locks.hold(key):
        log.append(f"{name}:enter")
        await asyncio.sleep(0.01)
        log.append(f"{name}:exit")


class TestKeyedLock:

    @pytest.mark.asyncio
    async def test_same_key_serializes(self):
        locks = KeyedLock()
        log = []

        await asyncio.gather(
            _critical_section(locks, "abc", log, "a"),
            _critical_section(locks, "abc", log, "b"),
        )

        assert log == ["a:enter", "a:exit", "b:enter", "b:exit"]

    @pytest.mark.asyncio
    async def test_different_keys_overlap(self):
        locks = KeyedLock()
        log = []

        await asyncio.gather(
            _critical_section(locks, "abc", log, "a"),
            _critical_section(locks, "xyz", log, "b"),
        )

        assert log[:2] == ["a:enter", "b:enter"]

    @pytest.mark.asyncio
    async def test_entries_released(self):
        locks = KeyedLock()

        async with locks.hold("abc"):
            assert locks.locked("abc")
            assert len(locks) == 1

        assert not locks.locked("abc")
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_entry_released_after_exception(self):
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold("abc"):
                raise RuntimeError("boom")

        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_cancelled_waiter_releases_entry(self):
        locks = KeyedLock()

        async def waiter():
            async with locks.hold("abc"):
                pass

        async with locks.hold("abc"):
            task = asyncio.create_task(waiter())
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            assert len(locks) == 1

        assert len(locks) == 0
