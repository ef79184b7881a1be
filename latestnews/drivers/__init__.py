"""Page drivers: the browser and static engines behind one protocol."""

from __future__ import annotations

from latestnews.drivers.base import Element, Page, Session, SessionFactory
from latestnews.drivers.browser import open_browser_session
from latestnews.drivers.static import open_static_session

_FACTORIES: dict[str, SessionFactory] = {
    "browser": open_browser_session,
    "static": open_static_session,
}


def get_session_factory(engine: str) -> SessionFactory:
    """Return the session factory registered for *engine*."""
    try:
        return _FACTORIES[engine]
    except KeyError:
        raise ValueError(
            f"Unknown engine {engine!r}; expected one of {sorted(_FACTORIES)}",
        ) from None


__all__ = [
    "Element",
    "Page",
    "Session",
    "SessionFactory",
    "get_session_factory",
    "open_browser_session",
    "open_static_session",
]
