"""Read-only page driver protocol consumed by the extractors.

A driver loads pages and answers DOM queries; it never runs extraction
logic itself.  Two engines implement it: :mod:`latestnews.drivers.browser`
(Playwright) and :mod:`latestnews.drivers.static` (HTTP + BeautifulSoup).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from latestnews.settings import ScraperSettings

WaitState = Literal["attached", "visible"]


class Element(Protocol):
    async def get_attribute(self, name: str) -> str | None: ...

    async def inner_text(self) -> str: ...

    async def text_content(self) -> str | None: ...


class Page(Protocol):
    @property
    def url(self) -> str: ...

    async def query_selector_all(self, selector: str) -> list[Element]: ...

    async def wait_for_selector(
        self, selector: str, *, timeout_ms: int, state: WaitState = "visible",
    ) -> None:
        """Suspend until *selector* matches; raise ``WaitTimeoutError`` otherwise."""
        ...


class Session(Protocol):
    """An isolated, single-use browsing context owned by one run."""

    async def load_page(self, url: str, *, wait_until: str, timeout_ms: int) -> Page:
        """Navigate to *url*; raise ``NavigationError`` on failure."""
        ...

    async def close(self) -> None:
        """Release every resource held by the session.  Never raises."""
        ...


SessionFactory = Callable[["ScraperSettings"], Awaitable[Session]]
