"""Basic drawing primitives on RGB numpy buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Create a (height, width, 3) buffer filled with color."""
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw a filled rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))

    if x1 >= x2 or y1 >= y2:
        return

    buffer[y1:y2, x1:x2] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a filled circle, touching only its bounding box."""
    h, w = buffer.shape[:2]

    x1 = max(0, int(cx - radius))
    y1 = max(0, int(cy - radius))
    x2 = min(w, int(cx + radius) + 1)
    y2 = min(h, int(cy + radius) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2
    buffer[y1:y2, x1:x2][mask] = color


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
) -> None:
    """Draw a filled axis-aligned ellipse."""
    if rx <= 0 or ry <= 0:
        return
    h, w = buffer.shape[:2]

    x1 = max(0, int(cx - rx))
    y1 = max(0, int(cy - ry))
    x2 = min(w, int(cx + rx) + 1)
    y2 = min(h, int(cy + ry) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = ((x_indices - cx) / rx) ** 2 + ((y_indices - cy) / ry) ** 2 <= 1.0
    buffer[y1:y2, x1:x2][mask] = color


def vertical_gradient(buffer: Buffer, top: Color, bottom: Color) -> None:
    """Fill buffer with a top-to-bottom color gradient."""
    h = buffer.shape[0]
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    start = np.array(top, dtype=np.float32)
    end = np.array(bottom, dtype=np.float32)
    rows = start + (end - start) * t
    buffer[:, :] = rows[:, None, :].astype(np.uint8)


def dim(buffer: Buffer, factor: float) -> None:
    """Darken the whole buffer in place (factor 0..1)."""
    np.multiply(buffer, max(0.0, min(1.0, factor)), out=buffer, casting="unsafe")
