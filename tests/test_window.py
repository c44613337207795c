from __future__ import annotations

import asyncio
import logging

from beechase.config.settings import SimulatorSettings
from beechase.core.events import EventBus, EventType
from beechase.core.state import GameState
from beechase.simulator.window import SimulatorWindow


def _window(make_game) -> SimulatorWindow:
    bus = EventBus()
    window = SimulatorWindow(make_game(), config=SimulatorSettings(), event_bus=bus)
    return window


def test_primary_press_starts_then_jumps(make_game) -> None:
    window = _window(make_game)
    try:
        window._primary_press("keyboard")
        # Applied when the frame drains the queue
        assert window.game.state == GameState.START
        asyncio.run(window.event_bus.process_queue())
        assert window.game.state == GameState.PLAYING

        window._primary_press("touch")
        asyncio.run(window.event_bus.process_queue())
        assert window.game.world.player.airborne

        sources = [e.source for e in window.event_bus.get_history(limit=100)
                   if e.type in (EventType.START, EventType.JUMP)]
        assert sources == ["keyboard", "touch"]
    finally:
        logging.getLogger().removeHandler(window._log_handler)


def test_log_lines_are_captured(make_game) -> None:
    window = _window(make_game)
    try:
        logging.getLogger("beechase.test").warning("hello from the test")
        assert any("hello from the test" in line for line in window._log_buffer)
    finally:
        logging.getLogger().removeHandler(window._log_handler)
