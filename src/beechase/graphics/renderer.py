"""Rasterizes a game snapshot into an RGB buffer.

Only shapes are drawn here; text overlays (score, screens, banners)
are added by the window on top of the blitted frame.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from beechase.game.snapshot import CollectibleView, GameSnapshot, ObstacleView, PlayerView
from beechase.graphics.primitives import (
    Color,
    dim,
    draw_circle,
    draw_ellipse,
    draw_rect,
    new_buffer,
    vertical_gradient,
)


@dataclass
class Palette:
    """Scene colors."""

    sky_top: Color = (191, 219, 254)
    sky_bottom: Color = (187, 247, 208)
    cloud: Color = (245, 248, 252)
    sun: Color = (253, 224, 71)
    ground: Color = (74, 222, 128)
    ground_edge: Color = (34, 197, 94)
    obstacle: Color = (220, 38, 38)
    obstacle_cap: Color = (185, 28, 28)
    coin: Color = (247, 147, 26)
    coin_rim: Color = (255, 200, 80)
    coin_flash: Color = (255, 245, 160)
    bee_body: Color = (250, 204, 21)
    bee_stripe: Color = (30, 30, 30)
    bee_wing: Color = (224, 242, 254)


class SceneRenderer:
    """Draws the sky, ground, obstacles, coin and bee of a snapshot."""

    def __init__(self, width: int, height: int, palette: Palette | None = None):
        self.width = width
        self.height = height
        self.palette = palette or Palette()
        self._buffer = new_buffer(width, height)

    def resize(self, width: int, height: int) -> None:
        if (width, height) != (self.width, self.height):
            self.width = width
            self.height = height
            self._buffer = new_buffer(width, height)

    def render(self, snapshot: GameSnapshot) -> NDArray[np.uint8]:
        """Draw one frame and return the (height, width, 3) buffer."""
        buffer = self._buffer
        self._draw_background(buffer, snapshot.ground_level)

        for obstacle in snapshot.obstacles:
            self._draw_obstacle(buffer, obstacle)
        self._draw_coin(buffer, snapshot.collectible, snapshot.frame)
        self._draw_bee(buffer, snapshot.player)

        if not snapshot.is_playing:
            dim(buffer, 0.5)

        return buffer

    def _draw_background(self, buffer: NDArray[np.uint8], ground_level: float) -> None:
        p = self.palette
        vertical_gradient(buffer, p.sky_top, p.sky_bottom)

        # Clouds
        for cx, cy, rx, ry in (
            (self.width * 0.12, 50, 32, 16),
            (self.width * 0.72, 90, 24, 12),
            (self.width * 0.5, 72, 40, 20),
        ):
            draw_ellipse(buffer, cx, cy, rx, ry, p.cloud)

        draw_circle(buffer, self.width - 64, 64, 32, p.sun)

        draw_rect(buffer, 0, ground_level, self.width, self.height - ground_level, p.ground)
        draw_rect(buffer, 0, ground_level, self.width, 16, p.ground_edge)

    def _draw_obstacle(self, buffer: NDArray[np.uint8], obstacle: ObstacleView) -> None:
        p = self.palette
        draw_rect(buffer, obstacle.x, obstacle.y, obstacle.width, obstacle.height, p.obstacle)
        draw_rect(buffer, obstacle.x, obstacle.y, obstacle.width, 8, p.obstacle_cap)

    def _draw_coin(self, buffer: NDArray[np.uint8], coin: CollectibleView, frame: int) -> None:
        p = self.palette
        r = coin.size / 2
        cx, cy = coin.x + r, coin.y + r

        if coin.just_caught:
            # Expanding ping while the catch cooldown runs
            pulse = 1.0 + 0.5 * abs(math.sin(frame * 0.4))
            draw_circle(buffer, cx, cy, r * pulse, p.coin_flash)

        draw_circle(buffer, cx, cy, r, p.coin_rim)
        draw_circle(buffer, cx, cy, r * 0.75, p.coin)
        draw_rect(buffer, cx - 2, cy - r * 0.5, 4, r, p.coin_rim)

    def _draw_bee(self, buffer: NDArray[np.uint8], bee: PlayerView) -> None:
        p = self.palette
        s = bee.size
        cx, cy = bee.x + s / 2, bee.y + s / 2

        # Wings flap faster in the air
        wing_ry = s * (0.28 if bee.airborne else 0.2)
        draw_ellipse(buffer, cx - s * 0.12, cy - s * 0.32, s * 0.18, wing_ry, p.bee_wing)
        draw_ellipse(buffer, cx + s * 0.12, cy - s * 0.32, s * 0.18, wing_ry, p.bee_wing)

        draw_ellipse(buffer, cx, cy, s * 0.5, s * 0.34, p.bee_body)
        for offset in (-0.2, 0.05, 0.3):
            draw_rect(buffer, cx + s * offset - 2, cy - s * 0.3, 4, s * 0.6, p.bee_stripe)
        draw_circle(buffer, cx + s * 0.38, cy - s * 0.06, 2, p.bee_stripe)
