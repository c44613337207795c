"""Hit and catch tests between the bee and the world.

Both tests work on positions after the tick's advance. The hitbox is
smaller than the sprite box; the catch test compares each axis on its
own (a square catch zone, not a circle).
"""

from typing import Iterable, Optional

from beechase.game.entities import Collectible, Obstacle, Player

HIT_PADDING = 16.0
CATCH_RADIUS = 50.0


def hits_obstacle(player: Player, obstacle: Obstacle, padding: float = HIT_PADDING) -> bool:
    """Player box shrunk by padding on every side overlaps the obstacle box."""
    return (
        player.x + padding < obstacle.x + obstacle.width
        and player.x + player.size - padding > obstacle.x
        and player.y + padding < obstacle.y + obstacle.height
        and player.y + player.size - padding > obstacle.y
    )


def catches_collectible(
    player: Player,
    collectible: Collectible,
    radius: float = CATCH_RADIUS,
) -> bool:
    """Both |dx| and |dy| between the anchors are under radius."""
    return (
        abs(player.x - collectible.x) < radius
        and abs(player.y - collectible.y) < radius
    )


def first_hit(
    player: Player,
    obstacles: Iterable[Obstacle],
    padding: float = HIT_PADDING,
) -> Optional[Obstacle]:
    """First obstacle the player runs into, or None."""
    for obstacle in obstacles:
        if hits_obstacle(player, obstacle, padding):
            return obstacle
    return None
