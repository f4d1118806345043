from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib
from typing import Any

from vdview_raster.canvas import RGBA
from vdview_raster.draw_text import DEFAULT_FONT_FAMILY
from vdview_raster.scene_renderer import BLACK, WHITE, RasterStyle
from vdview_script.scene import MAX_DRAW_ELEMENTS


DEFAULT_SCREENSHOT_PATH = Path("image_with_drawing.png")
DEFAULT_TITLE = "Image Viewer"

_VIEWER_KEYS = ("max_elements", "screenshot_path", "target_fps", "title")
_STYLE_KEYS = (
    "line_thickness",
    "point_radius",
    "font_size_px",
    "font_family",
    "font_path",
    "line_color",
    "point_color",
    "text_color",
    "label_background",
    "label_gap",
)
_COLOR_KEYS = ("line_color", "point_color", "text_color", "label_background")


@dataclass(frozen=True)
class ViewerConfig:
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
    max_elements: int = MAX_DRAW_ELEMENTS
    screenshot_path: Path = DEFAULT_SCREENSHOT_PATH
    target_fps: int = 60
    title: str = DEFAULT_TITLE

    def __post_init__(self) -> None:
        if self.max_elements < 0:
            raise ValueError("max_elements must be >= 0")
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")

    def style(self) -> RasterStyle:
        return RasterStyle(
            line_thickness=self.line_thickness,
            point_radius=self.point_radius,
            font_size_px=self.font_size_px,
            font_family=self.font_family,
            font_path=self.font_path,
            line_color=self.line_color,
            point_color=self.point_color,
            text_color=self.text_color,
            label_background=self.label_background,
            label_gap=self.label_gap,
        )

    def with_overrides(self, **overrides: Any) -> "ViewerConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"unknown config fields: {', '.join(unknown)}")
        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **applied)


def load_config(path: str | Path) -> ViewerConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"viewer config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw)


def config_from_mapping(raw: dict[str, Any]) -> ViewerConfig:
    unknown_tables = sorted(set(raw) - {"viewer", "style"})
    if unknown_tables:
        raise ValueError(f"unknown config tables: {', '.join(unknown_tables)}")
    values: dict[str, Any] = {}
    for table, allowed in (("viewer", _VIEWER_KEYS), ("style", _STYLE_KEYS)):
        section = raw.get(table, {})
        if not isinstance(section, dict):
            raise ValueError(f"[{table}] must be a table")
        for key, value in section.items():
            if key not in allowed:
                raise ValueError(f"unknown key in [{table}]: {key}")
            values[key] = _coerce_value(key, value)
    return ViewerConfig(**values)


def _coerce_value(key: str, value: Any) -> Any:
    if key in _COLOR_KEYS:
        if key == "label_background" and value is False:
            return None
        return _coerce_color(value, key)
    if key in ("screenshot_path", "font_path"):
        if not isinstance(value, str) or not value:
            raise ValueError(f"{key} must be a non-empty string")
        return Path(value)
    if key in ("line_thickness", "point_radius", "label_gap", "max_elements", "target_fps"):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"{key} must be an integer")
        return value
    if key == "font_size_px":
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError("font_size_px must be a number")
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _coerce_color(value: Any, label: str) -> RGBA:
    if not isinstance(value, list) or len(value) not in (3, 4):
        raise ValueError(f"{label} must be a list of 3 or 4 integers")
    channels = list(value)
    if len(channels) == 3:
        channels.append(255)
    for channel in channels:
        if not isinstance(channel, int) or isinstance(channel, bool) or not 0 <= channel <= 255:
            raise ValueError(f"{label} channels must be integers in [0, 255]")
    r, g, b, a = channels
    return (r, g, b, a)
