"""In-process high score store."""

from typing import Optional

from beechase.storage.base import HighScoreStore


class MemoryHighScoreStore(HighScoreStore):
    """
    Keeps the high score in memory.

    Used by headless runs and tests. Counts writes so callers can
    check that a value was persisted exactly once.
    """

    def __init__(self, initial: Optional[int] = None) -> None:
        self._value = initial
        self.writes = 0

    def read_high_score(self) -> Optional[int]:
        return self._value

    def write_high_score(self, score: int) -> bool:
        self._value = int(score)
        self.writes += 1
        return True
