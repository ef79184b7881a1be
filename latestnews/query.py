"""latestnews.query - fetch the newest article from a news homepage.

Basic usage::

    from latestnews.query import fetch_latest

    record = fetch_latest()
    if record is not None:
        print(record.title)
        print(record.url)
        print(record.text)

From async code::

    from latestnews.query import scrape_latest
    from latestnews.settings import load_settings

    record = await scrape_latest(load_settings(engine="static"))

A run moves through homepage load, link resolution, article load, content
resolution and normalization.  Any failure on the way ends the run with
``None``; a partially filled record is never returned.  The driver session
is released on every exit path, and a failing release never changes the
outcome of the run.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from latestnews.drivers import get_session_factory
from latestnews.exceptions import EmptyContentError, ScrapeError, WaitTimeoutError
from latestnews.extractors.content import resolve_content
from latestnews.extractors.latest_link import resolve_latest_link
from latestnews.extractors.normalize import normalize_text
from latestnews.items import ArticleRecord, utc_timestamp
from latestnews.settings import ScraperSettings, load_settings

if TYPE_CHECKING:
    from latestnews.drivers.base import Session, SessionFactory

logger = logging.getLogger(__name__)


async def _extract(session: Session, settings: ScraperSettings) -> ArticleRecord:
    logger.info("Loading homepage %s", settings.base_url)
    homepage = await session.load_page(
        settings.base_url,
        wait_until=settings.wait_until,
        timeout_ms=settings.homepage_timeout_ms,
    )

    target_url = await resolve_latest_link(
        homepage,
        selector=settings.link_selector,
        base_url=settings.base_url,
        timeout_ms=settings.link_timeout_ms,
    )

    logger.info("Loading article %s", target_url)
    article_page = await session.load_page(
        target_url,
        wait_until=settings.wait_until,
        timeout_ms=settings.article_timeout_ms,
    )

    content = await resolve_content(
        article_page,
        content_selectors=settings.content_selectors,
        title_selector=settings.title_selector,
        ready_selectors=settings.ready_selectors,
        ready_timeout_ms=settings.ready_timeout_ms,
    )

    text = normalize_text(content.text)
    if not text:
        if settings.strict:
            raise EmptyContentError("No article text extracted", url=target_url)
        logger.warning("Extraction degraded: no article text found on %s", target_url)

    return ArticleRecord(
        title=content.title,
        url=target_url,
        text=text,
        fetched_at=utc_timestamp(),
    )


async def scrape_latest(
    settings: ScraperSettings | None = None,
    *,
    session_factory: SessionFactory | None = None,
) -> ArticleRecord | None:
    """Fetch and normalize the latest article.

    Args:
        settings:        Run configuration; :func:`load_settings` when omitted.
        session_factory: Coroutine function creating a driver session.
                         Defaults to the factory for ``settings.engine``.

    Returns:
        The :class:`~latestnews.items.ArticleRecord`, or ``None`` if any step
        failed.  Failures are logged, never raised.
    """
    settings = settings or load_settings()
    factory = session_factory or get_session_factory(settings.engine)
    run_timeout = settings.run_timeout_ms / 1000 if settings.run_timeout_ms else None

    session: Session | None = None
    try:
        session = await factory(settings)
        try:
            return await asyncio.wait_for(_extract(session, settings), timeout=run_timeout)
        except TimeoutError as exc:
            raise WaitTimeoutError(
                f"Run exceeded {settings.run_timeout_ms} ms", url=settings.base_url,
            ) from exc
    except ScrapeError as exc:
        logger.error("Scrape failed: %s", exc)
        return None
    except Exception:
        logger.exception("Scrape failed")
        return None
    finally:
        if session is not None:
            try:
                await session.close()
            except Exception as exc:
                logger.warning("Closing the %s session failed: %s", settings.engine, exc)


def fetch_latest(
    settings: ScraperSettings | None = None,
    *,
    session_factory: SessionFactory | None = None,
) -> ArticleRecord | None:
    """Blocking wrapper around :func:`scrape_latest` for scripts and the CLI."""
    return asyncio.run(scrape_latest(settings, session_factory=session_factory))
