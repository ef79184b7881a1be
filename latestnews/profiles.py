"""YAML site profiles.

A profile file holds an optional ``default`` block and an optional
``domains`` block keyed by host::

    default:
      strict: false
    domains:
      yle.fi:
        link_selector: ".underlay-link"

For a given base URL the ``default`` block is applied first, then the
block of the most specific domain key matching the URL's host, either
exactly or as a parent domain (``yle.fi`` covers ``www.yle.fi``).

Structural problems are reported as :class:`ProfileError` naming the file
and the offending block, rather than surfacing later as an anonymous
settings validation failure.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from latestnews.exceptions import ProfileError

logger = logging.getLogger(__name__)

_TOP_LEVEL_KEYS = frozenset({"default", "domains"})


def _host(url: str) -> str:
    host = urlparse(url).hostname or ""
    return host.rstrip(".").lower()


def domain_matches(host: str, domain: str) -> bool:
    """True if *host* is *domain* or one of its subdomains."""
    domain = domain.strip().rstrip(".").lower()
    return bool(domain) and (host == domain or host.endswith("." + domain))


class SiteProfile:
    """A parsed and validated profile file."""

    def __init__(
        self,
        default: Mapping[str, Any] | None = None,
        domains: Mapping[str, Mapping[str, Any]] | None = None,
        source: str = "<profile>",
    ) -> None:
        self.default = dict(default or {})
        self.domains = {key.lower(): dict(block) for key, block in (domains or {}).items()}
        self.source = source

    @classmethod
    def from_file(
        cls, path: str | Path, allowed_keys: Collection[str] | None = None,
    ) -> SiteProfile:
        """Read and validate *path*.

        Args:
            path:         YAML file to read.
            allowed_keys: Setting names a block may use; ``None`` accepts any.

        Raises:
            ProfileError: if the file is not shaped like a profile.
            OSError, yaml.YAMLError: if it cannot be read or parsed.
        """
        source = str(path)
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if data is None:
            return cls(source=source)
        if not isinstance(data, dict):
            raise ProfileError(
                f"top level must be a mapping, got {type(data).__name__}", source=source,
            )

        unknown = sorted(str(k) for k in data if k not in _TOP_LEVEL_KEYS)
        if unknown:
            raise ProfileError(
                f"unknown top-level keys {unknown}; expected 'default' and/or 'domains'",
                source=source,
            )

        default = _check_block(data.get("default"), "default", source, allowed_keys)

        domains_raw = data.get("domains") or {}
        if not isinstance(domains_raw, dict):
            raise ProfileError("'domains' must map host names to blocks", source=source)
        domains: dict[str, dict[str, Any]] = {}
        for key, block in domains_raw.items():
            if not isinstance(key, str) or not key.strip():
                raise ProfileError(f"invalid domain key {key!r}", source=source)
            domains[key] = _check_block(block, f"domains.{key}", source, allowed_keys)

        logger.debug("Loaded profile %s (%d domain blocks)", source, len(domains))
        return cls(default, domains, source)

    def match(self, url: str) -> str | None:
        """Return the most specific domain key covering *url*'s host."""
        host = _host(url)
        candidates = [key for key in self.domains if domain_matches(host, key)]
        return max(candidates, key=len) if candidates else None

    def settings_for(self, url: str) -> dict[str, Any]:
        """Return ``default`` layered with the matching domain block for *url*."""
        merged = dict(self.default)
        domain = self.match(url)
        if domain is not None:
            logger.debug("Profile %s: using block %r for %s", self.source, domain, url)
            merged.update(self.domains[domain])
        return merged


def _check_block(
    block: Any, where: str, source: str, allowed_keys: Collection[str] | None,
) -> dict[str, Any]:
    if block is None:
        return {}
    if not isinstance(block, dict):
        raise ProfileError(f"'{where}' must be a mapping of settings", source=source)
    if allowed_keys is not None:
        unknown = sorted(str(k) for k in block if k not in allowed_keys)
        if unknown:
            raise ProfileError(f"unknown settings {unknown} in '{where}'", source=source)
    return block


def load_profile(
    path: str | Path, url: str, allowed_keys: Collection[str] | None = None,
) -> dict[str, Any]:
    """Load the profile at *path* and return the merged settings for *url*."""
    return SiteProfile.from_file(path, allowed_keys).settings_for(url)
