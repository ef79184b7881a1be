"""latestnews - fetch the newest article from a news homepage.

Quick usage::

    from latestnews import fetch_latest, render_text

    record = fetch_latest()
    if record is not None:
        print(render_text(record))

Writing the static page::

    from latestnews import fetch_latest, write_site

    record = fetch_latest()
    if record is not None:
        write_site(record, "dist/index.html")
"""

from latestnews.exceptions import (
    DriverError,
    EmptyContentError,
    MarkerTimeoutError,
    NavigationError,
    NotFoundError,
    ProfileError,
    ScrapeError,
    WaitTimeoutError,
)
from latestnews.extractors.normalize import normalize_text
from latestnews.items import ArticleRecord
from latestnews.output import write_site
from latestnews.query import fetch_latest, scrape_latest
from latestnews.renderers import render_html, render_text
from latestnews.settings import ScraperSettings, load_settings

__version__ = "0.1.0"
__all__ = [
    "ArticleRecord",
    "DriverError",
    "EmptyContentError",
    "MarkerTimeoutError",
    "NavigationError",
    "NotFoundError",
    "ProfileError",
    "ScrapeError",
    "ScraperSettings",
    "WaitTimeoutError",
    "fetch_latest",
    "load_settings",
    "normalize_text",
    "render_html",
    "render_text",
    "scrape_latest",
    "write_site",
]
