"""Current screen point — the shared target for element lookups.

An automation step sets the point (explicit ``x,y`` or a reserved keyword),
and a later step asks which element sits there. The point is one immutable
ScreenPoint swapped under a lock, so readers never see x from one write and
y from another.
"""
import logging
import threading
from typing import Callable

from .. import debug
from ..accessibility import ElementLookup, UIElement, get_backend
from .coords import format_coordinates, is_reserved, lookup_reserved, parse_coordinates, resolve_reserved
from .types import ScreenGeometry, ScreenPoint

log = logging.getLogger(__name__)


def _default_geometry() -> ScreenGeometry:
    from ..display import get_screen_geometry
    return get_screen_geometry()


class ScreenPointResolver:
    """Holds the current point and resolves elements against it.

    Args:
        lookup: element lookup backend; defaults to the configured one.
        geometry: callable returning the screen size for reserved keywords.
        initial: starting point, the origin by default.
    """

    def __init__(
        self,
        lookup: ElementLookup | None = None,
        geometry: Callable[[], ScreenGeometry] | None = None,
        initial: ScreenPoint | None = None,
    ):
        self._lookup = lookup
        self._geometry = geometry or _default_geometry
        self._point = initial or ScreenPoint.zero()
        self._lock = threading.Lock()

    @property
    def lookup(self) -> ElementLookup:
        return self._lookup or get_backend()

    # ─── Current point ──────────────────────────────────────────

    def current(self) -> ScreenPoint:
        with self._lock:
            return self._point

    def set_point(self, point: ScreenPoint) -> ScreenPoint:
        with self._lock:
            self._point = point
        debug.log_point("set", format_coordinates(point))
        return point

    def set_from_string(self, coordinates: str) -> ScreenPoint:
        """Parse ``"x,y"`` and make it the current point.

        Raises CoordinateParseError and leaves the current point as it was
        when *coordinates* is malformed.
        """
        return self.set_point(parse_coordinates(coordinates))

    def apply(self, value: str) -> ScreenPoint:
        """Set the current point from a reserved keyword or an ``"x,y"`` string."""
        if isinstance(value, str) and is_reserved(value):
            point = lookup_reserved(value, self._geometry())
            debug.log_point("reserved", format_coordinates(point), value)
            return self.set_point(point)
        return self.set_from_string(value)

    def to_string(self) -> str:
        return format_coordinates(self.current())

    # ─── Reserved positions ─────────────────────────────────────

    def resolve_reserved(self, keyword: str) -> ScreenPoint:
        """Place *keyword* on the current screen; (0, 0) if it is not reserved. Never mutates."""
        return resolve_reserved(keyword, self._geometry())

    def lookup_reserved(self, keyword: str) -> ScreenPoint | None:
        return lookup_reserved(keyword, self._geometry())

    # ─── Element lookup ─────────────────────────────────────────

    def element_at(self, point: ScreenPoint) -> UIElement | None:
        backend = self.lookup
        element = backend.lookup_element(point.x, point.y)
        debug.log_element(point.x, point.y, element.to_dict() if element else None, backend.name)
        return element

    def element_at_current_point(self) -> UIElement | None:
        return self.element_at(self.current())


_resolver: ScreenPointResolver | None = None
_resolver_mu = threading.Lock()


def get_resolver() -> ScreenPointResolver:
    """Process-wide resolver, created on first use."""
    global _resolver
    with _resolver_mu:
        if _resolver is None:
            _resolver = ScreenPointResolver()
            log.debug("Created process-wide screen point resolver")
        return _resolver


def reset_resolver(resolver: ScreenPointResolver | None = None) -> None:
    """Replace (or drop) the process-wide resolver."""
    global _resolver
    with _resolver_mu:
        _resolver = resolver
