"""Obstacle spawning and collectible respawn."""

import logging
import random
from typing import Optional

from beechase.config.settings import GameSettings
from beechase.game.entities import Collectible, EntityModel, Obstacle

logger = logging.getLogger(__name__)


class SpawnController:
    """Decides when new obstacles enter and where the collectible reappears.

    A new obstacle may only appear once the previous one has scrolled
    past the trailing line; after that it appears with a fixed chance
    each tick, so gaps vary from run to run.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()

    def lane_is_clear(self, model: EntityModel) -> bool:
        last = model.last_obstacle
        return last is None or last.x < self.settings.spawn_trailing_x

    def maybe_spawn_obstacle(self, model: EntityModel) -> Optional[Obstacle]:
        """Roll for a new obstacle at the right edge.

        Returns:
            The new obstacle, or None if nothing spawned this tick
        """
        if not self.lane_is_clear(model):
            return None
        if self.rng.random() >= self.settings.spawn_probability:
            return None

        obstacle = model.add_obstacle(self.settings.spawn_x)
        logger.debug(f"Obstacle {obstacle.id} spawned at x={obstacle.x:.0f}")
        return obstacle

    def respawn_collectible(self, collectible: Collectible) -> None:
        """Move the collectible back beyond the right edge.

        y is left alone; the next advance recomputes the bob.
        """
        s = self.settings
        collectible.x = s.spawn_x + self.rng.uniform(0, s.respawn_jitter)
        collectible.just_caught = False
        logger.debug(f"Collectible respawned at x={collectible.x:.0f}")
