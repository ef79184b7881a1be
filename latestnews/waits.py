"""Bounded race over independent readiness waits."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable

logger = logging.getLogger(__name__)


async def race(waits: Iterable[Awaitable[object]], timeout: float) -> int | None:
    """Wait until any of *waits* settles or *timeout* seconds elapse.

    A wait settles when it returns or raises; failures are swallowed.  The
    losers are cancelled before returning so no wait outlives the race.

    Returns:
        Index of the first wait that completed successfully, or ``None`` if
        the race timed out or the first wait to settle failed.
    """
    tasks = [asyncio.ensure_future(w) for w in waits]
    if not tasks:
        return None

    try:
        done, _ = await asyncio.wait(
            tasks, timeout=timeout, return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Retrieve every outcome so failed or cancelled waits are not reported
        # as never-retrieved exceptions.
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    if not done:
        logger.debug("Race timed out after %.1fs with %d waits", timeout, len(tasks))
        return None

    for index, task in enumerate(tasks):
        if task not in done:
            continue
        outcome = outcomes[index]
        if isinstance(outcome, BaseException):
            logger.debug("Wait %d settled with %s: %s", index, type(outcome).__name__, outcome)
            continue
        return index
    return None
