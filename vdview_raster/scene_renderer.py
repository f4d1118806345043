from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from vdview_raster.canvas import RGBA
from vdview_raster.draw_shapes import draw_filled_circle, draw_thick_line
from vdview_raster.draw_text import DEFAULT_FONT_FAMILY, draw_label
from vdview_script.scene import Point, Scene


BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)


@dataclass(frozen=True)
class RasterStyle:
    line_thickness: int = 5
    point_radius: int = 4
    font_size_px: float = 12.0
    font_family: str = DEFAULT_FONT_FAMILY
    font_path: Path | None = None
    line_color: RGBA = BLACK
    point_color: RGBA = BLACK
    text_color: RGBA = BLACK
    label_background: RGBA | None = WHITE
    label_gap: int = 5

    def __post_init__(self) -> None:
        if self.line_thickness <= 0:
            raise ValueError("line_thickness must be > 0")
        if self.point_radius < 0:
            raise ValueError("point_radius must be >= 0")
        if self.font_size_px <= 0:
            raise ValueError("font_size_px must be > 0")


def render_scene(dst: np.ndarray, scene: Scene, style: RasterStyle | None = None) -> None:
    """Draw every resolved line, then every point with its label on top."""
    style = style or RasterStyle()
    for segment in scene.segments():
        draw_thick_line(
            dst,
            segment.p1.x,
            segment.p1.y,
            segment.p2.x,
            segment.p2.y,
            style.line_color,
            thickness=style.line_thickness,
        )
    for point in scene.points:
        draw_point(dst, point, style)


def draw_point(dst: np.ndarray, point: Point, style: RasterStyle) -> None:
    draw_filled_circle(dst, point.x, point.y, style.point_radius, style.point_color)
    x, y = label_origin(point, style)
    draw_label(
        dst,
        x,
        y,
        point.label,
        style.text_color,
        background_color=style.label_background,
        font_family=style.font_family,
        font_size_px=style.font_size_px,
        font_path=style.font_path,
    )


def label_origin(point: Point, style: RasterStyle) -> tuple[int, int]:
    # Right of the marker, top aligned with the top of the circle.
    return (point.x + style.point_radius + style.label_gap, point.y - style.point_radius)
