import asyncio

import pytest

from infrastructure.locks import KeyedLock


pytestmark = pytest.mark.asyncio


async def test_same_key_is_serialized():
    locks = KeyedLock()
    inside = 0
    peak = 0

    async def worker():
        nonlocal inside, peak
        async with locks.hold("k"):
            inside += 1
            peak = max(peak, inside)
            await asyncio.sleep(0.001)
            inside -= 1

    await asyncio.gather(*(worker() for _ in range(10)))
    assert peak == 1
    assert len(locks) == 0


async def test_different_keys_do_not_block():
    locks = KeyedLock()
    release = asyncio.Event()

    async def holder():
        async with locks.hold("a"):
            await release.wait()

    task = asyncio.create_task(holder())
    await asyncio.sleep(0)
    async with locks.hold("b"):
        assert len(locks) == 2
    release.set()
    await task
    assert len(locks) == 0


async def test_entry_dropped_after_exception():
    locks = KeyedLock()
    with pytest.raises(RuntimeError):
        async with locks.hold("k"):
            raise RuntimeError("boom")
    assert len(locks) == 0
