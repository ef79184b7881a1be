"""Headless Chromium engine built on the Playwright async API.

Each run launches its own Playwright driver, browser, context and page, and
tears all four down in :meth:`BrowserSession.close`.  Nothing is pooled or
shared between runs.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from latestnews.drivers.base import WaitState
from latestnews.exceptions import DriverError, NavigationError, WaitTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, ElementHandle, Playwright
    from playwright.async_api import Page as PlaywrightPage

    from latestnews.settings import ScraperSettings

logger = logging.getLogger(__name__)

_LAUNCH_ARGS: list[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class BrowserElement:
    def __init__(self, handle: ElementHandle, page_url: str) -> None:
        self._handle = handle
        self._page_url = page_url

    async def get_attribute(self, name: str) -> str | None:
        try:
            return await self._handle.get_attribute(name)
        except PlaywrightError as exc:
            raise DriverError(f"get_attribute({name!r}) failed: {exc}", url=self._page_url) from exc

    async def inner_text(self) -> str:
        try:
            return await self._handle.inner_text()
        except PlaywrightError as exc:
            raise DriverError(f"inner_text() failed: {exc}", url=self._page_url) from exc

    async def text_content(self) -> str | None:
        try:
            return await self._handle.text_content()
        except PlaywrightError as exc:
            raise DriverError(f"text_content() failed: {exc}", url=self._page_url) from exc


class BrowserPage:
    def __init__(self, page: PlaywrightPage) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def query_selector_all(self, selector: str) -> list[BrowserElement]:
        try:
            handles = await self._page.query_selector_all(selector)
        except PlaywrightError as exc:
            raise DriverError(f"query {selector!r} failed: {exc}", url=self.url) from exc
        return [BrowserElement(h, self.url) for h in handles]

    async def wait_for_selector(
        self, selector: str, *, timeout_ms: int, state: WaitState = "visible",
    ) -> None:
        try:
            await self._page.wait_for_selector(selector, state=state, timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(
                f"{selector!r} not {state} within {timeout_ms} ms", url=self.url,
            ) from exc
        except PlaywrightError as exc:
            raise DriverError(f"wait for {selector!r} failed: {exc}", url=self.url) from exc


class BrowserSession:
    """One Playwright driver + Chromium instance + context + page."""

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: PlaywrightPage,
    ) -> None:
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page

    async def load_page(self, url: str, *, wait_until: str, timeout_ms: int) -> BrowserPage:
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationError(f"Timed out after {timeout_ms} ms loading {url}", url=url) from exc
        except PlaywrightError as exc:
            raise NavigationError(f"Failed to load {url}: {exc}", url=url) from exc
        if response is not None:
            logger.debug("Loaded %s (HTTP %d)", url, response.status)
        return BrowserPage(self._page)

    async def close(self) -> None:
        for closer in (self._page.close, self._context.close, self._browser.close):
            with contextlib.suppress(Exception):
                await closer()
        with contextlib.suppress(Exception):
            await self._playwright.stop()
        logger.debug("Browser session closed")


async def open_browser_session(settings: ScraperSettings) -> BrowserSession:
    """Launch a fresh headless Chromium session for one run.

    Raises:
        DriverError: if the browser cannot be started.  Anything started
            before the failure is released.
    """
    playwright: Any = None
    browser: Any = None
    context: Any = None
    try:
        playwright = await async_playwright().start()
        browser = await playwright.chromium.launch(headless=settings.headless, args=_LAUNCH_ARGS)
        context = await browser.new_context(
            user_agent=settings.user_agent,
            java_script_enabled=True,
            viewport={"width": 1920, "height": 1080},
        )
        page = await context.new_page()
    except PlaywrightError as exc:
        for resource in (context, browser):
            if resource is not None:
                with contextlib.suppress(Exception):
                    await resource.close()
        if playwright is not None:
            with contextlib.suppress(Exception):
                await playwright.stop()
        raise DriverError(
            f"Could not start Chromium: {exc}. Run: playwright install chromium",
        ) from exc
    logger.debug("Launched Chromium (headless=%s)", settings.headless)
    return BrowserSession(playwright, browser, context, page)
