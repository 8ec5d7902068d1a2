"""X11 backend — hit-tests the top-level window stack with python-xlib."""
import logging

from ... import config
from ...display import get_xlib_display, get_xlib_lock
from ..base import ElementLookup
from ..types import UIElement

log = logging.getLogger(__name__)


def _window_name(window, depth: int = 2) -> str:
    """WM_NAME of *window*, looking into children for reparenting window managers."""
    name = window.get_wm_name()
    if name:
        return name if isinstance(name, str) else name.decode(errors="replace")
    if depth <= 0:
        return ""
    for child in window.query_tree().children:
        name = _window_name(child, depth - 1)
        if name:
            return name
    return ""


class XlibLookup(ElementLookup):
    """Reports the top-most viewable top-level window containing the point."""

    name = "xlib"

    def __init__(self, display: str | None = None):
        self.display = display

    def lookup_element(self, x: float, y: float) -> UIElement | None:
        import Xlib.X

        display_str = self.display or config.DISPLAY
        with get_xlib_lock(display_str):
            try:
                root = get_xlib_display(display_str).screen().root
                # query_tree lists children bottom-to-top in stacking order
                for window in reversed(root.query_tree().children):
                    if window.get_attributes().map_state != Xlib.X.IsViewable:
                        continue
                    geom = window.get_geometry()
                    element = UIElement(
                        id=window.id,
                        x=geom.x,
                        y=geom.y,
                        width=geom.width,
                        height=geom.height,
                        role="window",
                        platform=config.PLATFORM,
                    )
                    if element.contains(x, y):
                        element.name = _window_name(window)
                        return element
            except Exception as e:
                log.warning(f"Element lookup at ({x:g}, {y:g}) on {display_str} failed: {e}")
        return None

    def check_health(self) -> dict:
        display_str = self.display or config.DISPLAY
        with get_xlib_lock(display_str):
            try:
                screen = get_xlib_display(display_str).screen()
                return {
                    "ok": True, "backend": "xlib", "display": display_str,
                    "width": screen.width_in_pixels, "height": screen.height_in_pixels,
                }
            except Exception as e:
                return {"ok": False, "backend": "xlib", "display": display_str, "error": str(e)}
