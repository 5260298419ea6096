"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for quiz state storage."""

    @abstractmethod
    def load_state(self) -> dict | None:
        """Load the saved state blob. Returns state dict or None if not found."""
        pass

    @abstractmethod
    def save_state(self, state: dict) -> None:
        """Save the full state blob."""
        pass
