"""Runtime settings for a latest-article scrape.

Defaults target the Yle homepage (https://yle.fi), whose feed lists the
newest story first.  Values are layered, lowest precedence first:

1. field defaults below
2. environment: ``LATESTNEWS_BASE_URL``, ``LATESTNEWS_ENGINE``,
   ``LATESTNEWS_STRICT``
3. a YAML profile (see :mod:`latestnews.profiles`)
4. explicit keyword overrides (the CLI flags)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from latestnews.profiles import SiteProfile

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


class ScraperSettings(BaseModel):
    """Validated configuration for one run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Site
    base_url: str = "https://yle.fi"
    site_name: str = "Yle"
    language: str = "fi"

    # Selectors
    link_selector: str = ".underlay-link"
    title_selector: str = "h1"
    content_selectors: list[str] = Field(
        default_factory=lambda: ["article", "div.yle__article__content", "main"],
    )
    ready_selectors: list[str] = Field(
        default_factory=lambda: ["article", "div.yle__article__content"],
    )

    # Timeouts (milliseconds)
    wait_until: Literal["commit", "domcontentloaded", "load", "networkidle"] = "domcontentloaded"
    homepage_timeout_ms: int = Field(default=60_000, gt=0)
    article_timeout_ms: int = Field(default=60_000, gt=0)
    link_timeout_ms: int = Field(default=30_000, gt=0)
    ready_timeout_ms: int = Field(default=15_000, gt=0)
    run_timeout_ms: int | None = Field(default=None, gt=0)

    # Driver
    engine: Literal["browser", "static"] = "browser"
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    # Policy
    strict: bool = False

    @field_validator("base_url")
    @classmethod
    def require_http_url(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator("content_selectors")
    @classmethod
    def require_content_selectors(cls, v: list[str]) -> list[str]:
        selectors = [s.strip() for s in v if s and s.strip()]
        if not selectors:
            raise ValueError("content_selectors must name at least one selector")
        return selectors

    @field_validator("link_selector", "title_selector")
    @classmethod
    def require_selector(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("selector must not be empty")
        return v.strip()


def _env_settings() -> dict[str, Any]:
    env: dict[str, Any] = {}
    if base_url := os.getenv("LATESTNEWS_BASE_URL"):
        env["base_url"] = base_url
    if engine := os.getenv("LATESTNEWS_ENGINE"):
        env["engine"] = engine
    if strict := os.getenv("LATESTNEWS_STRICT"):
        env["strict"] = strict.strip().lower() in _TRUE_STRINGS
    return env


def load_settings(profile: str | Path | None = None, **overrides: Any) -> ScraperSettings:
    """Build :class:`ScraperSettings` from env, an optional profile and overrides.

    Overrides whose value is ``None`` are ignored so CLI flags that were not
    given fall through to lower layers.

    The profile block is chosen by the base URL from env or overrides,
    falling back to a ``base_url`` set in the profile's ``default`` block.

    Raises:
        latestnews.exceptions.ProfileError: if the profile is malformed or
            names a setting that does not exist.
        pydantic.ValidationError: if the merged values are invalid.
    """
    explicit = {k: v for k, v in overrides.items() if v is not None}
    values: dict[str, Any] = _env_settings()
    values.update(explicit)

    if profile is not None:
        site_profile = SiteProfile.from_file(profile, allowed_keys=ScraperSettings.model_fields)
        base_url = (
            values.get("base_url")
            or site_profile.default.get("base_url")
            or ScraperSettings.model_fields["base_url"].default
        )
        values.update(site_profile.settings_for(base_url))
        values.update(explicit)

    return ScraperSettings(**values)
