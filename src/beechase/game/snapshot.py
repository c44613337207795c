"""Read-only views of a session handed to the presentation layer."""

from dataclasses import dataclass
from typing import Tuple

from beechase.core.state import GameState
from beechase.game.entities import Collectible, Obstacle, Player


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    size: int
    airborne: bool

    @classmethod
    def of(cls, player: Player) -> "PlayerView":
        return cls(player.x, player.y, player.size, player.airborne)


@dataclass(frozen=True)
class ObstacleView:
    id: int
    x: float
    y: float
    width: int
    height: int

    @classmethod
    def of(cls, obstacle: Obstacle) -> "ObstacleView":
        return cls(obstacle.id, obstacle.x, obstacle.y, obstacle.width, obstacle.height)


@dataclass(frozen=True)
class CollectibleView:
    x: float
    y: float
    size: int
    just_caught: bool

    @classmethod
    def of(cls, collectible: Collectible) -> "CollectibleView":
        return cls(collectible.x, collectible.y, collectible.size, collectible.just_caught)


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs for one frame."""

    state: GameState
    player: PlayerView
    obstacles: Tuple[ObstacleView, ...]
    collectible: CollectibleView
    score: int
    high_score: int
    is_new_record: bool
    can_restart: bool
    ground_level: float
    speed: float
    frame: int = 0

    @property
    def is_playing(self) -> bool:
        return self.state == GameState.PLAYING
