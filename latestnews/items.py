"""Pydantic model for the normalized article produced by a run."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from latestnews.extractors.normalize import normalize_text


def utc_timestamp(moment: datetime | None = None) -> str:
    """Return *moment* (default: now) as an ISO-8601 UTC string with ``Z``."""
    moment = moment or datetime.now(UTC)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    stamp = moment.astimezone(UTC).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class ArticleRecord(BaseModel):
    """The latest article, as serialized to ``latest.json``.

    Immutable once built.  ``fetched_at`` accepts a datetime or an ISO-8601
    string, is stored as a UTC ``...Z`` timestamp and is exposed as
    ``fetchedAt`` when dumped with :meth:`to_json_dict`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    url: str
    text: str = ""
    fetched_at: str = Field(alias="fetchedAt")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator("url")
    @classmethod
    def require_absolute_url(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"url must be absolute http(s), got {v!r}")
        return v

    @field_validator("text", mode="before")
    @classmethod
    def normalize_body(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return normalize_text(v)
        return v

    @field_validator("fetched_at", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                v = datetime.fromisoformat(v.strip())
            except ValueError:
                raise ValueError(f"fetchedAt must be an ISO-8601 timestamp, got {v!r}") from None
        if isinstance(v, datetime):
            return utc_timestamp(v)
        return v

    @property
    def lines(self) -> list[str]:
        """Body text split into its normalized lines."""
        return self.text.split("\n") if self.text else []

    def to_json_dict(self) -> dict[str, str]:
        """Return the flat four-field mapping written to ``latest.json``."""
        return self.model_dump(by_alias=True)
