"""Score bookkeeping and the persisted high score."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from beechase.storage.base import HighScoreStore, PersistenceError

logger = logging.getLogger(__name__)


@dataclass
class ScoreState:
    """Score of the running session plus the cached high score.

    Attributes:
        raw: Tick counter, +1 per tick and a bonus per catch
        high: Last known persisted high score
        divisor: raw units per displayed point
    """

    raw: int = 0
    high: int = 0
    divisor: int = 10

    @property
    def display(self) -> int:
        return self.raw // self.divisor


@dataclass(frozen=True)
class FinalizeResult:
    """Outcome of closing a session."""

    display_score: int
    high_score: int
    previous_high: int
    is_new_record: bool
    persisted: bool = True


class ScoreKeeper:
    """Accumulates the session score and owns the high score.

    The high score is read from the store once at construction. A new
    record is written through the store at most once per finalize; if
    that fails the in-memory value still moves forward and the failure
    is only reported.
    """

    def __init__(
        self,
        store: HighScoreStore,
        catch_bonus: int = 100,
        divisor: int = 10,
        on_persistence_error: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.catch_bonus = catch_bonus
        self.state = ScoreState(divisor=divisor)
        self._on_persistence_error = on_persistence_error
        self.load()

    @property
    def raw(self) -> int:
        return self.state.raw

    @property
    def display(self) -> int:
        return self.state.display

    @property
    def high(self) -> int:
        return self.state.high

    def load(self) -> int:
        """Refresh the cached high score from the store."""
        try:
            stored = self.store.read_high_score()
        except PersistenceError as e:
            self._report(f"Error loading high score: {e}")
            stored = None

        self.state.high = max(self.state.high, stored or 0)
        logger.info(f"High score loaded: {self.state.high}")
        return self.state.high

    def reset(self) -> None:
        self.state.raw = 0

    def tick(self, caught: bool = False) -> int:
        """Add one tick, plus the catch bonus when caught."""
        if caught:
            self.state.raw += self.catch_bonus
        self.state.raw += 1
        return self.state.raw

    def finalize(self, raw: Optional[int] = None) -> FinalizeResult:
        """Close the session and record a new high score if it beat the old one."""
        if raw is not None:
            self.state.raw = raw

        display = self.state.display
        previous = self.state.high

        if display <= previous:
            return FinalizeResult(
                display_score=display,
                high_score=previous,
                previous_high=previous,
                is_new_record=False,
            )

        self.state.high = display
        persisted = self._write(display)
        logger.info(f"New high score: {display} (was {previous})")

        return FinalizeResult(
            display_score=display,
            high_score=display,
            previous_high=previous,
            is_new_record=True,
            persisted=persisted,
        )

    def _write(self, score: int) -> bool:
        try:
            ok = self.store.write_high_score(score)
        except PersistenceError as e:
            self._report(f"Error saving high score: {e}")
            return False

        if not ok:
            self._report(f"High score {score} was not persisted")
        return ok

    def _report(self, message: str) -> None:
        logger.warning(message)
        if self._on_persistence_error:
            self._on_persistence_error(message)
