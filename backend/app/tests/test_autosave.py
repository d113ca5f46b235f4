"""
Tests for the debounced writer.
"""
import asyncio
from app.services.autosave import DebouncedWriter


def _recorder():
    writes = []
    return writes, lambda key, value: writes.append((key, value))


def test_rapid_edits_coalesce_into_one_write():
    writes, write = _recorder()

    async def scenario():
        writer = DebouncedWriter(write, delay=0.05)
        writer.schedule("trip-1", ["a"])
        writer.schedule("trip-1", ["a", "b"])
        writer.schedule("trip-1", ["a", "b", "c"])
        assert writes == []
        assert writer.pending("trip-1") == ["a", "b", "c"]
        await asyncio.sleep(0.2)
        assert not writer.has_pending("trip-1")

    asyncio.run(scenario())
    assert writes == [("trip-1", ["a", "b", "c"])]


def test_keys_are_debounced_independently():
    writes, write = _recorder()

    async def scenario():
        writer = DebouncedWriter(write, delay=0.05)
        writer.schedule("trip-1", 1)
        writer.schedule("trip-2", 2)
        await asyncio.sleep(0.2)

    asyncio.run(scenario())
    assert sorted(writes) == [("trip-1", 1), ("trip-2", 2)]


def test_flush_writes_once_and_cancels_timer():
    writes, write = _recorder()

    async def scenario():
        writer = DebouncedWriter(write, delay=0.05)
        writer.schedule("trip-1", "latest")
        assert writer.flush("trip-1") is True
        assert writer.flush("trip-1") is False
        await asyncio.sleep(0.2)

    asyncio.run(scenario())
    assert writes == [("trip-1", "latest")]


def test_flush_all_and_discard():
    writes, write = _recorder()

    async def scenario():
        writer = DebouncedWriter(write, delay=10)
        writer.schedule("trip-1", 1)
        writer.schedule("trip-2", 2)
        writer.discard("trip-2")
        assert writer.flush_all() == 1

    asyncio.run(scenario())
    assert writes == [("trip-1", 1)]


def test_failed_write_is_logged_not_raised():
    async def scenario():
        def failing(key, value):
            raise OSError("disk full")
        writer = DebouncedWriter(failing, delay=0.01)
        writer.schedule("trip-1", 1)
        await asyncio.sleep(0.1)
        return writer.has_pending("trip-1")

    assert asyncio.run(scenario()) is False


def test_without_event_loop_writes_through():
    writes, write = _recorder()
    writer = DebouncedWriter(write, delay=10)
    writer.schedule("trip-1", "now")
    assert writes == [("trip-1", "now")]
    assert not writer.has_pending("trip-1")
