"""Abstract base class for element lookup backends."""
from abc import ABC, abstractmethod
from .types import UIElement


class ElementLookup(ABC):
    """Interface for backends that report the UI element at a screen coordinate."""

    name = "base"

    @abstractmethod
    def lookup_element(self, x: float, y: float) -> UIElement | None:
        """Return the element rendered at (x, y).

        Returns:
            The element, or None when nothing is there (empty background,
            off-screen point). Absence is a normal outcome, not an error.
        """
        ...

    @abstractmethod
    def check_health(self) -> dict:
        """Check if the backend is ready."""
        ...
