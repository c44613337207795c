"""
State machine for the Bee Chase session flow.

States:
    START: Title screen, waiting for the first start intent
    PLAYING: A session is running and the clock ticks
    GAME_OVER: The bee hit an obstacle; restart after the gate opens
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Session states."""
    START = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class StateContext:
    """Context data shared across transitions.

    Attributes:
        restart_allowed: Restart gate, closed for a short window after game over
        generation: Session counter used to invalidate stale timers
        is_new_record: Set by game over when the session beat the high score
    """
    restart_allowed: bool = True
    generation: int = 0
    is_new_record: bool = False


StateListener = Callable[[GameState, GameState, StateContext], None]


class StateMachine:
    """
    Manages session state and transitions.

    Only the transitions listed in VALID_TRANSITIONS are accepted;
    listeners are notified after every successful transition.
    """

    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        (GameState.START, GameState.PLAYING),
        (GameState.PLAYING, GameState.GAME_OVER),
        (GameState.GAME_OVER, GameState.PLAYING),  # Play again
    ]

    def __init__(self, initial_state: GameState = GameState.START) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    @property
    def context(self) -> StateContext:
        """Get current context."""
        return self._context

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.PLAYING

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Context attributes to set

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        # Notify listeners
        for listener in self._listeners:
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

