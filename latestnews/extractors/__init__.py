"""Extraction sub-package: link resolution, content tiers, text cleanup."""

from .content import ExtractedContent, resolve_content, wait_for_content
from .latest_link import resolve_href, resolve_latest_link
from .normalize import normalize_text

__all__ = [
    "ExtractedContent",
    "normalize_text",
    "resolve_content",
    "resolve_href",
    "resolve_latest_link",
    "wait_for_content",
]
