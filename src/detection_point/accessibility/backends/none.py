"""Null backend — headless hosts with no element tree to query."""
from ..base import ElementLookup
from ..types import UIElement


class NullLookup(ElementLookup):
    """Never finds an element."""

    name = "none"

    def lookup_element(self, x: float, y: float) -> UIElement | None:
        return None

    def check_health(self) -> dict:
        return {"ok": True, "backend": "none", "note": "Element lookup disabled — every point is empty"}
