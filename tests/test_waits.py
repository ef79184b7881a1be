"""Tests for latestnews.waits.race."""

from __future__ import annotations

import asyncio
import time

from latestnews.waits import race


async def _sleep_then(delay: float, value: object = None) -> object:
    await asyncio.sleep(delay)
    return value


async def _fail_after(delay: float) -> None:
    await asyncio.sleep(delay)
    raise RuntimeError("wait failed")


class TestRace:
    def test_first_success_wins(self):
        winner = asyncio.run(race([_sleep_then(0.5), _sleep_then(0.01)], timeout=2))
        assert winner == 1

    def test_timeout_returns_none(self):
        start = time.monotonic()
        winner = asyncio.run(race([_sleep_then(5), _sleep_then(5)], timeout=0.05))
        assert winner is None
        assert time.monotonic() - start < 2

    def test_failure_settles_race_without_raising(self):
        winner = asyncio.run(race([_fail_after(0.01), _sleep_then(5)], timeout=2))
        assert winner is None

    def test_all_failures_swallowed(self):
        assert asyncio.run(race([_fail_after(0), _fail_after(0)], timeout=1)) is None

    def test_empty_race(self):
        assert asyncio.run(race([], timeout=1)) is None

    def test_losers_are_cancelled(self):
        cancelled = []

        async def slow():
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        async def scenario():
            return await race([slow(), _sleep_then(0.01)], timeout=2)

        assert asyncio.run(scenario()) == 1
        assert cancelled == [True]
