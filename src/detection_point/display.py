"""X11 display access — Xlib connection cache and screen geometry."""
import logging
import threading

from . import config
from .point.types import ScreenGeometry

log = logging.getLogger(__name__)

# ─── State ───────────────────────────────────────────────────────

_xlib_cache: dict[str, object] = {}     # display_str -> Xlib.display.Display

# Per-display lock — Xlib is not thread-safe; aiohttp executor threads
# must serialize their access to the same display connection.
_xlib_locks: dict[str, threading.Lock] = {}
_xlib_locks_mu = threading.Lock()


# ─── Public API ──────────────────────────────────────────────────


def get_xlib_lock(display_str: str) -> threading.Lock:
    with _xlib_locks_mu:
        if display_str not in _xlib_locks:
            _xlib_locks[display_str] = threading.Lock()
        return _xlib_locks[display_str]


def get_xlib_display(display_str: str | None = None):
    """Return a cached Xlib connection for *display_str*."""
    import Xlib.display

    display_str = display_str or config.DISPLAY
    cached = _xlib_cache.get(display_str)
    if cached is not None:
        return cached

    conn = Xlib.display.Display(display_str)
    _xlib_cache[display_str] = conn
    return conn


def release_xlib_display(display_str: str) -> None:
    """Close and remove the cached Xlib connection for *display_str*."""
    conn = _xlib_cache.pop(display_str, None)
    if conn is not None:
        try:
            conn.close()
        except Exception as e:
            log.debug(f"Closing Xlib connection {display_str} failed: {e}")


def get_screen_geometry(display_str: str | None = None) -> ScreenGeometry:
    """Root screen size of *display_str*, or the configured default when X is unavailable."""
    display_str = display_str or config.DISPLAY
    with get_xlib_lock(display_str):
        try:
            screen = get_xlib_display(display_str).screen()
            return ScreenGeometry(
                width=screen.width_in_pixels,
                height=screen.height_in_pixels,
                platform=config.PLATFORM,
            )
        except Exception as e:
            log.warning(
                f"Cannot read screen size of {display_str} ({e}); using "
                f"{config.DEFAULT_SCREEN_WIDTH}x{config.DEFAULT_SCREEN_HEIGHT}"
            )
    return default_geometry()


def default_geometry() -> ScreenGeometry:
    return ScreenGeometry(
        width=config.DEFAULT_SCREEN_WIDTH,
        height=config.DEFAULT_SCREEN_HEIGHT,
        platform=config.PLATFORM,
    )


def cleanup_all() -> None:
    """Close every cached Xlib connection (called on daemon shutdown)."""
    for display_str in list(_xlib_cache):
        release_xlib_display(display_str)
    log.info("All Xlib connections closed")
