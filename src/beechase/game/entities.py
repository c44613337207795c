"""Entities of a Bee Chase session and their motion.

Coordinates are screen pixels with the origin at the top-left corner;
each entity is anchored at its own top-left corner.
"""

import math
from dataclasses import dataclass, replace
from typing import List, Optional

from beechase.config.settings import GameSettings


@dataclass
class Player:
    x: float
    y: float
    size: int = 40
    airborne: bool = False


@dataclass
class Obstacle:
    id: int
    x: float
    y: float
    width: int = 30
    height: int = 60


@dataclass
class Collectible:
    x: float
    y: float
    size: int = 30
    just_caught: bool = False  # Catch cooldown, not tested against the player


def ground_level_for(viewport_height: float, settings: GameSettings) -> float:
    """Ground line for a viewport height.

    Kept low enough that a full hop stays inside the viewport.
    """
    minimum = settings.player_size + settings.jump_height
    return max(float(viewport_height - settings.ground_margin), minimum)


class EntityModel:
    """Player, obstacle lane and collectible of the active session."""

    def __init__(self, settings: GameSettings, ground_level: Optional[float] = None):
        self.settings = settings
        if ground_level is None:
            ground_level = ground_level_for(settings.viewport_height, settings)
        self.ground_level = ground_level
        self.player = Player(x=settings.player_x, y=0.0, size=settings.player_size)
        self.obstacles: List[Obstacle] = []
        self.collectible = Collectible(x=0.0, y=0.0, size=settings.collectible_size)
        self._next_id = 1
        self.reset(ground_level)

    @property
    def resting_y(self) -> float:
        """Player y when standing on the ground."""
        return self.ground_level - self.settings.player_size

    def reset(self, ground_level: float) -> None:
        """Place everything at its start position on the given ground line."""
        s = self.settings
        self.ground_level = ground_level
        self.player = Player(x=s.player_x, y=self.resting_y, size=s.player_size)
        self.obstacles = []
        self.collectible = Collectible(
            x=s.collectible_start_x,
            y=ground_level - s.collectible_clearance,
            size=s.collectible_size,
        )

    def advance(self, speed: float, now_ms: float) -> bool:
        """Scroll the world left by one tick.

        Obstacles move by speed and are dropped once fully past the left
        edge. The collectible moves slower and bobs on a sine of now_ms.

        Returns:
            True if the collectible left the screen and needs a respawn
        """
        s = self.settings

        for obstacle in self.obstacles:
            obstacle.x -= speed
        self.obstacles = [o for o in self.obstacles if o.x > -o.width]

        coin = self.collectible
        coin.x -= speed * s.collectible_speed_factor
        coin.y = (
            self.ground_level
            - coin.size
            - s.collectible_hover
            + math.sin(now_ms * s.bob_frequency) * s.bob_amplitude
        )
        return coin.x < -coin.size

    def add_obstacle(self, x: float) -> Obstacle:
        """Append an obstacle standing on the ground at x."""
        s = self.settings
        obstacle = Obstacle(
            id=self._next_id,
            x=x,
            y=self.ground_level - s.obstacle_height,
            width=s.obstacle_width,
            height=s.obstacle_height,
        )
        self._next_id += 1
        self.obstacles.append(obstacle)
        return obstacle

    @property
    def last_obstacle(self) -> Optional[Obstacle]:
        return self.obstacles[-1] if self.obstacles else None

    def jump(self) -> bool:
        """Hop up by the jump height.

        Returns:
            True if the hop started, False if already airborne
        """
        if self.player.airborne:
            return False
        self.player.airborne = True
        self.player.y -= self.settings.jump_height
        return True

    def settle(self) -> None:
        """Put the player back on the ground."""
        self.player.y = self.resting_y
        self.player.airborne = False

    def clone(self) -> "EntityModel":
        """Independent copy for computing a tick before committing it."""
        copy = EntityModel.__new__(EntityModel)
        copy.settings = self.settings
        copy.ground_level = self.ground_level
        copy.player = replace(self.player)
        copy.obstacles = [replace(o) for o in self.obstacles]
        copy.collectible = replace(self.collectible)
        copy._next_id = self._next_id
        return copy
