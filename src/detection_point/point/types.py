"""Data types for screen points and reserved positions."""
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ScreenPoint:
    """An absolute screen coordinate. No range check; off-screen points simply match nothing."""
    x: float
    y: float

    @classmethod
    def zero(cls) -> "ScreenPoint":
        return cls(0.0, 0.0)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


class ReservedPosition(str, Enum):
    """Keywords naming a position relative to the screen edges (case-sensitive)."""
    LEFT_TOP = "left-top"
    TOP = "top"
    RIGHT_TOP = "right-top"
    CENTER = "center"
    LEFT_BOTTOM = "left-bottom"
    BOTTOM = "bottom"
    RIGHT_BOTTOM = "right-bottom"


@dataclass(frozen=True)
class ScreenGeometry:
    """Screen size used to place reserved positions."""
    width: float
    height: float
    platform: str | None = None
