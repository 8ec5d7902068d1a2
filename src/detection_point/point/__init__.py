"""Screen points: coordinate strings, reserved positions, the current point."""
from .coords import (
    CoordinateParseError,
    finite_point,
    format_coordinates,
    is_reserved,
    lookup_reserved,
    parse_coordinates,
    resolve_reserved,
)
from .resolver import ScreenPointResolver, get_resolver, reset_resolver
from .types import ReservedPosition, ScreenGeometry, ScreenPoint

__all__ = [
    "CoordinateParseError",
    "ReservedPosition",
    "ScreenGeometry",
    "ScreenPoint",
    "ScreenPointResolver",
    "finite_point",
    "format_coordinates",
    "get_resolver",
    "is_reserved",
    "lookup_reserved",
    "parse_coordinates",
    "reset_resolver",
    "resolve_reserved",
]
