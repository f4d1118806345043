from __future__ import annotations

import math

import numpy as np

from vdview_raster.canvas import RGBA, draw_hline, draw_pixel


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """1px Bresenham segment, both endpoints included."""
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        draw_pixel(dst, x0, y0, color)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def draw_filled_circle(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA) -> None:
    if radius < 0:
        raise ValueError("radius must be >= 0")
    r2 = radius * radius
    for dy in range(-radius, radius + 1):
        span = int(math.sqrt(max(0, r2 - dy * dy)))
        draw_hline(dst, cx - span, cx + span, cy + dy, color)


def draw_thick_line(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    thickness: int = 1,
) -> None:
    """Stroke a segment by stacking 1px lines offset along its normal.

    Endpoints get no caps or joins. A zero-length segment is drawn as a
    filled square so the stroke never disappears.
    """
    if thickness <= 0:
        raise ValueError("thickness must be > 0")
    half = thickness // 2
    dx = float(x1 - x0)
    dy = float(y1 - y0)
    length = math.hypot(dx, dy)

    if length == 0:
        for oy in range(-half, half + 1):
            for ox in range(-half, half + 1):
                draw_pixel(dst, x0 + ox, y0 + oy, color)
        return

    nx = -dy / length
    ny = dx / length
    for i in range(-half, half + 1):
        # Offsets truncate toward zero.
        ox = int(i * nx)
        oy = int(i * ny)
        draw_line(dst, x0 + ox, y0 + oy, x1 + ox, y1 + oy, color)
