"""
Tests for the periodic background refresher.
"""

import asyncio

import pytest

from timeoff_cache.services import PeriodicRefresher


async def test_runs_immediately_then_on_interval():
    calls = 0

    async def tick():
        nonlocal calls
        calls += 1

    refresher = PeriodicRefresher(tick, interval=0.01)
    assert refresher.start() is True
    await asyncio.sleep(0.055)
    await refresher.stop()

    assert calls >= 3
    assert not refresher.is_running


async def test_only_one_task_is_live():
    started = asyncio.Event()

    async def tick():
        started.set()

    refresher = PeriodicRefresher(tick, interval=10)
    assert refresher.start() is True
    assert refresher.start() is False
    await started.wait()
    await refresher.stop()

    # Restartable after stop
    assert refresher.start() is True
    await refresher.stop()


async def test_callback_errors_do_not_stop_the_loop():
    calls = 0

    async def flaky():
        nonlocal calls
        calls += 1
        raise RuntimeError("poll failed")

    refresher = PeriodicRefresher(flaky, interval=0.01)
    refresher.start()
    await asyncio.sleep(0.035)

    assert refresher.is_running
    assert calls >= 2
    await refresher.stop()


async def test_stop_without_start_is_a_no_op():
    async def tick():
        pass

    await PeriodicRefresher(tick, interval=1).stop()


def test_rejects_non_positive_interval():
    async def tick():
        pass

    with pytest.raises(ValueError):
        PeriodicRefresher(tick, interval=0)
