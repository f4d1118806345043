from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from vdview_raster.canvas import RGBA, fill_rect


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "liberationsans",
    "arial",
    "helvetica",
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_label(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str | None,
    color: RGBA,
    *,
    background_color: RGBA | None = (255, 255, 255, 255),
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    font_path: str | Path | None = None,
) -> tuple[int, int]:
    """Draw ``text`` with its top-left corner at (x, y) over a filled box.

    The box is filled before the glyphs are composited so the text always
    sits on top of it. Returns the (width, height) of the box, or (0, 0) when
    there was nothing to draw.
    """
    if not text:
        return (0, 0)
    font = load_font(font_family=font_family, font_size_px=font_size_px, font_path=_path_key(font_path))
    mask = _render_mask(text=text, font=font)
    h, w = mask.shape
    if background_color is not None:
        fill_rect(dst, x, y, w, h, background_color)
    _blend_mask(dst, x, y, mask, color)
    return (w, h)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    font_path: str | Path | None = None,
) -> tuple[int, int]:
    font = load_font(font_family=font_family, font_size_px=font_size_px, font_path=_path_key(font_path))
    if not text:
        return (0, 0)
    left, top, right, bottom = font.getbbox(text)
    return (max(1, int(right - left)), max(1, int(bottom - top)))


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(np.round(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.round(out_alpha * 255.0), 0, 255).astype(np.uint8)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def load_font(
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    font_path: str | None = None,
) -> Font:
    size = max(1, int(round(font_size_px)))
    resolved = Path(font_path) if font_path is not None else _resolve_font_path(font_family)
    if resolved is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(resolved), size=size)
    except OSError:
        return ImageFont.load_default()


def _path_key(font_path: str | Path | None) -> str | None:
    return None if font_path is None else str(font_path)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path.home() / ".fonts",
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            if path.stem.lower().replace(" ", "") == p:
                return path
        for path in candidates:
            if p in path.stem.lower().replace(" ", ""):
                return path
    return None
