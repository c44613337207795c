from __future__ import annotations

import random
from typing import Callable, Optional

import pytest

from beechase.config.settings import GameSettings
from beechase.core.events import EventBus
from beechase.game.machine import GameStateMachine
from beechase.storage.base import HighScoreStore, PersistenceError
from beechase.storage.memory import MemoryHighScoreStore


class FixedRandom(random.Random):
    """random.Random that always rolls the same value."""

    def __init__(self, value: float = 0.0) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.value


class BrokenStore(HighScoreStore):
    """Store whose medium is unavailable."""

    def __init__(self, fail_read: bool = False, refuse_write: bool = False) -> None:
        self.fail_read = fail_read
        self.refuse_write = refuse_write
        self.attempts = 0

    def read_high_score(self) -> Optional[int]:
        if self.fail_read:
            raise PersistenceError("storage unavailable")
        return None

    def write_high_score(self, score: int) -> bool:
        self.attempts += 1
        if self.refuse_write:
            return False
        raise PersistenceError("quota exceeded")


@pytest.fixture()
def fixed_random() -> type[FixedRandom]:
    return FixedRandom


@pytest.fixture()
def broken_store() -> type[BrokenStore]:
    return BrokenStore


@pytest.fixture()
def game_settings() -> GameSettings:
    """Default constants, but no random obstacles unless a test adds them."""
    return GameSettings(spawn_probability=0.0)


@pytest.fixture()
def store() -> MemoryHighScoreStore:
    return MemoryHighScoreStore()


@pytest.fixture()
def make_game(game_settings: GameSettings, store: MemoryHighScoreStore) -> Callable[..., GameStateMachine]:
    """Factory for games with a pinned wall clock (the coin bob stays at 0)."""

    def _make(
        settings: GameSettings | None = None,
        high_score_store=None,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> GameStateMachine:
        return GameStateMachine(
            settings or game_settings,
            high_score_store or store,
            event_bus=event_bus,
            rng=rng or FixedRandom(0.5),
            time_source=lambda: 0.0,
        )

    return _make


@pytest.fixture()
def run_ms() -> Callable[[GameStateMachine, float], int]:
    """Feed a game real time in frame-sized steps."""

    def _run(game: GameStateMachine, ms: float) -> int:
        ticks = 0
        step = game.settings.tick_ms
        for _ in range(int(ms // step)):
            ticks += game.update(step)
        return ticks

    return _run
