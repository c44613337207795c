"""Graphics module for the Bee Chase rendering pipeline."""

from beechase.graphics.renderer import Palette, SceneRenderer
from beechase.graphics.primitives import (
    dim,
    draw_circle,
    draw_ellipse,
    draw_rect,
    new_buffer,
    vertical_gradient,
)

__all__ = [
    "Palette",
    "SceneRenderer",
    "dim",
    "draw_circle",
    "draw_ellipse",
    "draw_rect",
    "new_buffer",
    "vertical_gradient",
]
