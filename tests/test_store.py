# (c) Copyright Datacraft, 2026
"""Tests for store locking."""
import asyncio
import gc

import pytest

from checkflow.core.store import ChecklistStore


def test_job_lock_is_shared_while_referenced():
    store = ChecklistStore()

    lock = store.job_lock("job-1")

    assert store.job_lock("job-1") is lock
    assert store.job_lock("job-2") is not lock


def test_unused_locks_are_released():
    """Test that lock tables do not grow with every job ever touched."""
    store = ChecklistStore()
    for n in range(100):
        store.job_lock(f"job-{n}")
        store.office_lock(f"office-{n}")
    gc.collect()

    assert len(store._job_locks) == 0
    assert len(store._office_locks) == 0


@pytest.mark.asyncio
async def test_held_lock_survives_collection():
    """Test that waiters on a held lock queue behind the holder."""
    store = ChecklistStore()
    order = []

    async def worker(name):
        async with store.job_lock("job-1"):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            gc.collect()
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert order == ["a-in", "a-out", "b-in", "b-out"]
