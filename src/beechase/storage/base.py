"""
Abstract base class for high score persistence.

The game core only needs to read and write one integer. Where and how
it is kept (a JSON file, process memory, a browser's local storage
behind a bridge) belongs to the implementation.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PersistenceError(Exception):
    """Reading or writing the durable high score failed."""


class HighScoreStore(ABC):
    """Key/value contract for the persisted high score."""

    @abstractmethod
    def read_high_score(self) -> Optional[int]:
        """
        Read the stored high score.

        Returns:
            The stored value, or None when nothing usable is stored

        Raises:
            PersistenceError: If the storage medium cannot be read
        """
        ...

    @abstractmethod
    def write_high_score(self, score: int) -> bool:
        """
        Store a new high score.

        Returns:
            True on success, False if the value was not persisted

        Raises:
            PersistenceError: If the storage medium cannot be written
        """
        ...


def parse_score(value: object) -> Optional[int]:
    """Coerce a stored value to a non-negative integer, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value >= 0 else None
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
        return parsed if parsed >= 0 else None
    return None
