"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from typing import Callable


class Speaker(ABC):
    """Pronounces words for the player. Fire-and-forget."""

    @abstractmethod
    def speak(self, text: str) -> None:
        """Say the text out loud."""
        pass


class WordBankSource(ABC):
    """Read-only provider of grade-level word banks."""

    @abstractmethod
    def list_grades(self) -> list[int]:
        """Return the available grades in ascending order."""
        pass

    @abstractmethod
    def get_bank(self, grade: int) -> dict[str, str] | None:
        """Return {word: definition} for a grade, or None if unknown."""
        pass


class Scheduler(ABC):
    """Runs a callback once after a delay."""

    @abstractmethod
    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Queue the callback to run once delay_ms have elapsed."""
        pass
