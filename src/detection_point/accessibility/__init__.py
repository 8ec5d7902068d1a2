"""Pluggable element lookup — selects the backend and re-exports its types.

Backend selected by DP_ELEMENT_BACKEND env var: xlib|none
"""
from .. import config
from .base import ElementLookup
from .types import UIElement

_backend: ElementLookup | None = None


def get_backend() -> ElementLookup:
    global _backend
    if _backend is not None:
        return _backend

    name = config.ELEMENT_BACKEND.lower()
    if name == "xlib":
        from .backends.xlib import XlibLookup
        _backend = XlibLookup()
    elif name == "none":
        from .backends.none import NullLookup
        _backend = NullLookup()
    else:
        raise ValueError(f"Unknown element backend: {name}. Use xlib|none")

    return _backend


def set_backend(backend: ElementLookup | None) -> None:
    """Install *backend* (None resets to the configured one on next use)."""
    global _backend
    _backend = backend


def lookup_element(x: float, y: float) -> UIElement | None:
    return get_backend().lookup_element(x, y)


__all__ = ["ElementLookup", "UIElement", "get_backend", "set_backend", "lookup_element"]
