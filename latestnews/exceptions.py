"""Failure taxonomy for a scrape run.

Every error raised by a driver or resolver derives from :class:`ScrapeError`.
:func:`latestnews.query.scrape_latest` converts all of them into a ``None``
result, so none of these escape a run.
"""

from __future__ import annotations


class ScrapeError(RuntimeError):
    """Base class for recoverable scrape failures.

    Attributes:
        url -- the page being processed when the failure occurred
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class DriverError(ScrapeError):
    """The page driver failed while reading the DOM or starting a session."""


class NavigationError(ScrapeError):
    """A page failed to load within its timeout."""


class NotFoundError(ScrapeError):
    """No usable latest-article link was located on the homepage."""


class WaitTimeoutError(ScrapeError):
    """A readiness wait exceeded its bound."""


class MarkerTimeoutError(NotFoundError, WaitTimeoutError):
    """No teaser-link marker appeared before the wait expired."""


class EmptyContentError(ScrapeError):
    """Strict mode: the article page yielded no body text."""


class ProfileError(ValueError):
    """A site profile file is malformed.  Raised while loading configuration,
    before any run starts.

    Attributes:
        source -- path of the offending profile
    """

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source
