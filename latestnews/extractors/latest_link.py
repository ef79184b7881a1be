"""Locate the newest article link on a homepage.

Precondition: the site renders its homepage feed newest-first.  The first
element matching the teaser marker, in document order, is therefore taken
to be the latest article.  No timestamp is consulted; the DOM carries none
this resolver could trust.

The link is read from the element's ``href`` rather than by clicking it, so
client-side navigation handlers on the host page never run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

from latestnews.exceptions import MarkerTimeoutError, NotFoundError, WaitTimeoutError

if TYPE_CHECKING:
    from latestnews.drivers.base import Page

logger = logging.getLogger(__name__)


def is_absolute_url(href: str) -> bool:
    parsed = urlparse(href)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def resolve_href(href: str, base_url: str) -> str:
    """Return *href* as an absolute URL, joined to *base_url* if relative."""
    href = href.strip()
    if is_absolute_url(href):
        return href
    return urljoin(base_url, href)


async def resolve_latest_link(
    page: Page,
    *,
    selector: str,
    base_url: str,
    timeout_ms: int = 30_000,
) -> str:
    """Return the absolute URL of the first *selector* match on *page*.

    Raises:
        MarkerTimeoutError: no match appeared within *timeout_ms*.
        NotFoundError: the first match has no usable ``href``.
    """
    try:
        await page.wait_for_selector(selector, timeout_ms=timeout_ms, state="attached")
    except WaitTimeoutError as exc:
        raise MarkerTimeoutError(
            f"No {selector!r} link appeared within {timeout_ms} ms", url=page.url,
        ) from exc

    links = await page.query_selector_all(selector)
    if not links:
        raise NotFoundError(f"No {selector!r} link found", url=page.url)

    href = await links[0].get_attribute("href")
    if not href or not href.strip():
        raise NotFoundError(f"No href found on the most recent {selector!r}", url=page.url)

    target = resolve_href(href, base_url)
    logger.info("Latest article link: %s", target)
    return target
