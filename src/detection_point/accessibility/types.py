"""Data types for element lookups."""
from dataclasses import asdict, dataclass


@dataclass
class UIElement:
    """A UI element found at a screen point."""
    id: int | str
    name: str = ""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    role: str = ""
    platform: str | None = None

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def to_dict(self) -> dict:
        return asdict(self)
