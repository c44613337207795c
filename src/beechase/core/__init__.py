"""Core framework components for Bee Chase."""

from .state import GameState, StateContext, StateMachine
from .events import EventBus, Event, EventType
from .clock import Clock, Timer, TimerQueue

__all__ = [
    "GameState",
    "StateContext",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "Clock",
    "Timer",
    "TimerQueue",
]
