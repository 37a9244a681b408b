"""
Tests for the minimum-interval rate gate
"""
import asyncio
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from orchestration.rate_limiter import RateGate

# asyncio timers may fire a hair early relative to time.monotonic()
TOLERANCE = 0.01


def test_first_acquire_does_not_wait():
    gate = RateGate(min_interval=5.0)

    waited = asyncio.run(gate.acquire())

    assert waited == 0.0
    assert gate.total_acquired == 1


def test_back_to_back_calls_are_spaced():
    gate = RateGate(min_interval=0.2)

    async def run():
        await gate.acquire()
        first = time.monotonic()
        await gate.acquire()
        second = time.monotonic()
        return second - first

    gap = asyncio.run(run())

    assert gap >= 0.2 - TOLERANCE


def test_concurrent_acquirers_queue_behind_one_slot():
    gate = RateGate(min_interval=0.1)
    resumed: list[float] = []

    async def caller():
        await gate.acquire()
        resumed.append(time.monotonic())

    async def run():
        await asyncio.gather(*(caller() for _ in range(4)))

    asyncio.run(run())

    resumed.sort()
    gaps = [b - a for a, b in zip(resumed, resumed[1:])]
    assert len(gaps) == 3
    assert all(gap >= 0.1 - TOLERANCE for gap in gaps)
    assert gate.total_acquired == 4


def test_no_wait_after_interval_has_passed():
    gate = RateGate(min_interval=0.05)

    async def run():
        await gate.acquire()
        await asyncio.sleep(0.1)
        return await gate.acquire()

    assert asyncio.run(run()) == 0.0


def test_usage_stats():
    gate = RateGate(min_interval=0.0)
    assert gate.get_usage_stats()["seconds_since_last_call"] is None

    asyncio.run(gate.acquire())
    stats = gate.get_usage_stats()

    assert stats["total_acquired"] == 1
    assert stats["min_interval"] == 0.0
    assert stats["seconds_since_last_call"] >= 0
