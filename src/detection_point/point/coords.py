"""Coordinate strings and reserved screen positions.

Coordinates travel as plain text in ``x,y`` form (no brackets, comma separator,
surrounding whitespace ignored). Reserved keywords name positions relative to
the screen edges, inset by ``min(width, height) * margin_ratio``.
"""
import logging
import math
import re

from .. import config
from .types import ReservedPosition, ScreenGeometry, ScreenPoint

log = logging.getLogger(__name__)

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_COORDS_RE = re.compile(rf"^\s*({_NUMBER})\s*,\s*({_NUMBER})\s*$")


class CoordinateParseError(ValueError):
    """Coordinate string is not two comma-separated numbers."""


def parse_coordinates(text: str) -> ScreenPoint:
    """Parse ``"x,y"`` into a ScreenPoint, e.g. ``"12.5, -3"`` → (12.5, -3.0)."""
    if not isinstance(text, str):
        raise CoordinateParseError(f"Coordinates must be a string, got {type(text).__name__}")
    m = _COORDS_RE.match(text)
    if not m:
        raise CoordinateParseError(
            f"Cannot parse coordinates '{text}'. Expected 'x,y' where x and y are numbers"
        )
    return finite_point(float(m.group(1)), float(m.group(2)))


def finite_point(x: float, y: float) -> ScreenPoint:
    """ScreenPoint from two numbers; raises CoordinateParseError unless both are finite."""
    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError) as e:
        raise CoordinateParseError(f"Coordinates must be numbers: {e}") from e
    if not (math.isfinite(x) and math.isfinite(y)):
        raise CoordinateParseError(f"Coordinates must be finite, got ({x}, {y})")
    return ScreenPoint(x, y)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_coordinates(point: ScreenPoint) -> str:
    """Render a point as ``"x,y"``; parse_coordinates() reads it back to the same values."""
    return f"{_format_number(point.x)},{_format_number(point.y)}"


def is_reserved(keyword: str) -> bool:
    return isinstance(keyword, str) and keyword in _RESERVED_VALUES


def lookup_reserved(
    keyword: str,
    geometry: ScreenGeometry,
    margin_ratio: float | None = None,
) -> ScreenPoint | None:
    """Place a reserved keyword on a screen of the given size.

    Returns None when *keyword* is not one of the seven reserved positions,
    so callers can tell "unknown" apart from a real (0, 0).
    """
    if not is_reserved(keyword):
        return None

    ratio = config.RESERVED_MARGIN_RATIO if margin_ratio is None else margin_ratio
    w, h = float(geometry.width), float(geometry.height)
    m = min(w, h) * ratio

    position = ReservedPosition(keyword)
    if position is ReservedPosition.LEFT_TOP:
        return ScreenPoint(m, m)
    if position is ReservedPosition.TOP:
        return ScreenPoint(w / 2, m)
    if position is ReservedPosition.RIGHT_TOP:
        return ScreenPoint(w - m, m)
    if position is ReservedPosition.CENTER:
        return ScreenPoint(w / 2, h / 2)
    if position is ReservedPosition.LEFT_BOTTOM:
        return ScreenPoint(m, h - m)
    if position is ReservedPosition.BOTTOM:
        return ScreenPoint(w / 2, h - m)
    return ScreenPoint(w - m, h - m)  # right-bottom


def resolve_reserved(
    keyword: str,
    geometry: ScreenGeometry,
    margin_ratio: float | None = None,
) -> ScreenPoint:
    """Like lookup_reserved(), but an unknown keyword yields the origin (0, 0)."""
    point = lookup_reserved(keyword, geometry, margin_ratio)
    if point is None:
        log.warning(f"Unknown reserved position '{keyword}', falling back to (0, 0)")
        return ScreenPoint.zero()
    return point


_RESERVED_VALUES = frozenset(p.value for p in ReservedPosition)
