"""Title and body extraction from an article page with tiered fallback.

Body tiers, tried in order (the first non-empty text wins):

1. the first ``article`` element
2. the first site-specific content container (e.g. ``div.yle__article__content``)
3. the first ``main`` element
4. the empty string

Tiers come from ``ScraperSettings.content_selectors``.  Each tier is a
probe returning ``None`` when it yields nothing, including when the driver
fails mid-read, so one broken tier never aborts the chain.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple

from latestnews.exceptions import DriverError
from latestnews.waits import race

if TYPE_CHECKING:
    from latestnews.drivers.base import Page

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_SELECTORS: tuple[str, ...] = ("article", "div.yle__article__content", "main")


class ExtractedContent(NamedTuple):
    title: str
    text: str
    source: str | None  # selector of the winning tier; None when degraded


async def wait_for_content(page: Page, selectors: Sequence[str], timeout_ms: int) -> str | None:
    """Best-effort readiness: race visibility waits for *selectors*.

    Returns the selector that became visible first, or ``None``.  Never
    raises; the caller reads the page either way.
    """
    if not selectors:
        return None
    winner = await race(
        (page.wait_for_selector(s, timeout_ms=timeout_ms, state="visible") for s in selectors),
        timeout=timeout_ms / 1000,
    )
    if winner is None:
        logger.debug("No content container became visible on %s", page.url)
        return None
    return selectors[winner]


async def _probe_inner_text(page: Page, selector: str) -> str | None:
    try:
        elements = await page.query_selector_all(selector)
        if not elements:
            return None
        text = await elements[0].inner_text()
    except DriverError as exc:
        logger.debug("Tier %r unreadable on %s: %s", selector, page.url, exc)
        return None
    text = (text or "").strip()
    return text or None


async def _probe_title(page: Page, selector: str) -> str:
    try:
        elements = await page.query_selector_all(selector)
        if not elements:
            return ""
        title = await elements[0].text_content()
    except DriverError as exc:
        logger.debug("Title %r unreadable on %s: %s", selector, page.url, exc)
        return ""
    return (title or "").strip()


async def resolve_content(
    page: Page,
    *,
    content_selectors: Sequence[str] = DEFAULT_CONTENT_SELECTORS,
    title_selector: str = "h1",
    ready_selectors: Sequence[str] | None = None,
    ready_timeout_ms: int = 15_000,
) -> ExtractedContent:
    """Extract the title and raw body text of an article page.  Never raises
    for missing content; a page with nothing readable yields empty strings.

    *ready_selectors* defaults to every content tier except the last, the
    page-wide fallback region.
    """
    if ready_selectors is None:
        ready_selectors = list(content_selectors[:-1]) or list(content_selectors)
    await wait_for_content(page, ready_selectors, ready_timeout_ms)

    title = await _probe_title(page, title_selector)

    for selector in content_selectors:
        text = await _probe_inner_text(page, selector)
        if text is not None:
            logger.debug("Body text from %r (%d chars)", selector, len(text))
            return ExtractedContent(title, text, selector)

    return ExtractedContent(title, "", None)
