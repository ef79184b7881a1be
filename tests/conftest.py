"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from latestnews.drivers.static import StaticPage
from latestnews.exceptions import NavigationError
from latestnews.settings import ScraperSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SITE = "https://site"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def page_from_fixture(name: str, url: str = SITE) -> StaticPage:
    return StaticPage.from_html(read_fixture(name), url)


def dict_fetcher(pages: dict[str, str]) -> Callable[[str, float], str]:
    """Fetcher serving canned HTML; unknown URLs fail like a 404."""

    def fetch(url: str, timeout: float) -> str:
        try:
            return pages[url]
        except KeyError:
            raise NavigationError(f"HTTP 404 fetching {url}: Not Found", url=url) from None

    return fetch


@pytest.fixture
def homepage_html() -> str:
    return read_fixture("homepage.html")


@pytest.fixture
def article_html() -> str:
    return read_fixture("article.html")


@pytest.fixture
def site_settings() -> ScraperSettings:
    return ScraperSettings(
        base_url=SITE,
        engine="static",
        ready_timeout_ms=200,
        link_timeout_ms=200,
    )
