"""
Main entry point for Bee Chase.

Runs the pygame simulator by default, or a windowless autopilot
session when BEECHASE_ENV=headless.
"""

import asyncio
import logging
import random
import sys

from beechase.config.settings import Settings, get_settings
from beechase.core.events import EventBus
from beechase.core.state import GameState
from beechase.game.machine import GameStateMachine
from beechase.game.score import FinalizeResult
from beechase.storage.base import HighScoreStore
from beechase.storage.json_store import JsonHighScoreStore
from beechase.storage.memory import MemoryHighScoreStore


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def create_store(settings: Settings) -> HighScoreStore:
    """High score store configured by the storage settings."""
    return JsonHighScoreStore(
        settings.storage.high_score_path,
        key=settings.storage.high_score_key,
    )


def create_game(
    settings: Settings,
    store: HighScoreStore | None = None,
    event_bus: EventBus | None = None,
) -> GameStateMachine:
    """Build a game from settings."""
    rng = random.Random(settings.seed) if settings.seed is not None else None
    return GameStateMachine(
        settings.game,
        store or create_store(settings),
        event_bus=event_bus,
        rng=rng,
    )


def autopilot(game: GameStateMachine) -> None:
    """Jump when the next obstacle is about to reach the bee's hitbox."""
    s = game.settings
    player = game.world.player
    front = player.x + player.size - s.hit_padding
    reach = game.speed * (s.jump_duration_ms / s.tick_ms) / 3

    for obstacle in game.world.obstacles:
        gap = obstacle.x - front
        if 0 <= gap <= reach:
            game.on_jump()
            return


def run_headless(settings: Settings, store: HighScoreStore | None = None) -> FinalizeResult | None:
    """Play one autopilot session without a window.

    The high score is kept in memory unless a store is passed in.

    Returns:
        The session result, or None if max_ticks ran out first
    """
    logger = logging.getLogger(__name__)
    game = create_game(settings, store or MemoryHighScoreStore())
    tick_ms = settings.game.tick_ms

    game.on_start()
    for _ in range(settings.max_ticks):
        autopilot(game)
        game.update(tick_ms)
        if game.state == GameState.GAME_OVER:
            break

    result = game.last_result
    if result is None:
        logger.info(f"Headless run stopped after {game.ticks} ticks, score {game.scores.display}")
    else:
        logger.info(
            f"Headless run finished after {game.ticks} ticks: "
            f"score {result.display_score}, high {result.high_score}"
            + (" (new record)" if result.is_new_record else "")
        )
    return result


async def run_simulator(settings: Settings) -> None:
    """Run the windowed version."""
    from beechase.simulator.window import SimulatorWindow

    event_bus = EventBus()
    game = create_game(settings, event_bus=event_bus)

    window = SimulatorWindow(
        game=game,
        config=settings.simulator,
        event_bus=event_bus,
    )
    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Bee Chase starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        elif settings.is_headless:
            logger.info("Running in headless mode")
            run_headless(settings)
        else:
            logger.error(f"Unknown environment: {settings.env}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Bee Chase stopped")


if __name__ == "__main__":
    main()
