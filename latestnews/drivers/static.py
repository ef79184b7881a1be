"""Static engine: plain HTTP fetch parsed with BeautifulSoup.

No JavaScript runs, so pages that build their feed client-side yield
nothing here; use the browser engine for those.  Because the parsed DOM
never changes, a selector wait either succeeds at once or fails at once.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import urllib.error
import urllib.request
import zlib
from collections.abc import Callable
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

from latestnews.drivers.base import WaitState
from latestnews.exceptions import DriverError, NavigationError, WaitTimeoutError

if TYPE_CHECKING:
    from latestnews.settings import ScraperSettings

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], str]

# Elements whose boundaries become line breaks in rendered text
_BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "div",
        "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
        "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main",
        "nav", "ol", "p", "pre", "section", "summary", "table", "tr", "ul",
    },
)
_SKIP_TAGS: frozenset[str] = frozenset({"script", "style", "noscript", "template"})


def _decode_body(raw: bytes, headers: object | None) -> str:
    encoding = ""
    charset = "utf-8"
    if headers is not None:
        encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        charset = headers.get_content_charset("utf-8") or "utf-8"

    if encoding == "gzip":
        raw = gzip.decompress(raw)
    elif encoding in ("deflate", "zlib"):
        raw = zlib.decompress(raw)

    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def make_http_fetcher(user_agent: str) -> Fetcher:
    """Return a fetcher performing one GET per call, without retries."""

    def fetch(url: str, timeout: float) -> str:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            raise NavigationError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)
        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "fi,en-US;q=0.8,en;q=0.7",
                "Accept-Encoding": "gzip, deflate",
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return _decode_body(resp.read(), resp.headers)
        except urllib.error.HTTPError as exc:
            raise NavigationError(f"HTTP {exc.code} fetching {url}: {exc.reason}", url=url) from exc
        except urllib.error.URLError as exc:
            raise NavigationError(f"URL error fetching {url}: {exc.reason}", url=url) from exc
        except (OSError, zlib.error) as exc:
            raise NavigationError(f"Network error fetching {url}: {exc}", url=url) from exc

    return fetch


def _collect_text(node: Tag, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag):
            if child.name in _SKIP_TAGS:
                continue
            if child.name == "br":
                parts.append("\n")
                continue
            block = child.name in _BLOCK_TAGS
            if block:
                parts.append("\n")
            _collect_text(child, parts)
            if block:
                parts.append("\n")


def inner_text(tag: Tag) -> str:
    """Approximate a browser's ``innerText``: block boundaries become newlines."""
    parts: list[str] = []
    _collect_text(tag, parts)
    return "".join(parts).strip("\n")


class StaticElement:
    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    async def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    async def inner_text(self) -> str:
        return inner_text(self._tag)

    async def text_content(self) -> str | None:
        return self._tag.get_text()


class StaticPage:
    def __init__(self, soup: BeautifulSoup, url: str) -> None:
        self._soup = soup
        self._url = url

    @classmethod
    def from_html(cls, html: str, url: str = "") -> StaticPage:
        return cls(BeautifulSoup(html, "lxml"), url)

    @property
    def url(self) -> str:
        return self._url

    def _select(self, selector: str) -> list[Tag]:
        try:
            return self._soup.select(selector)
        except SelectorSyntaxError as exc:
            raise DriverError(f"Invalid selector {selector!r}: {exc}", url=self._url) from exc

    async def query_selector_all(self, selector: str) -> list[StaticElement]:
        return [StaticElement(tag) for tag in self._select(selector)]

    async def wait_for_selector(
        self, selector: str, *, timeout_ms: int, state: WaitState = "visible",
    ) -> None:
        if not self._select(selector):
            raise WaitTimeoutError(f"{selector!r} not present in static page", url=self._url)


class StaticSession:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetch = fetcher
        self._closed = False

    async def load_page(self, url: str, *, wait_until: str, timeout_ms: int) -> StaticPage:
        if self._closed:
            raise NavigationError("Session already closed", url=url)
        try:
            html = await asyncio.wait_for(
                asyncio.to_thread(self._fetch, url, timeout_ms / 1000),
                timeout=timeout_ms / 1000,
            )
        except TimeoutError as exc:
            raise NavigationError(f"Timed out after {timeout_ms} ms loading {url}", url=url) from exc
        if not html or not html.strip():
            raise NavigationError(f"Empty response body for {url}", url=url)
        logger.debug("Fetched %s (%d chars)", url, len(html))
        return StaticPage.from_html(html, url)

    async def close(self) -> None:
        self._closed = True


async def open_static_session(
    settings: ScraperSettings, fetcher: Fetcher | None = None,
) -> StaticSession:
    """Create a static session; *fetcher* defaults to a urllib GET."""
    return StaticSession(fetcher or make_http_fetcher(settings.user_agent))
