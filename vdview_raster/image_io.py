from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

LOGGER = logging.getLogger(__name__)


class ImageLoadError(RuntimeError):
    pass


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image file into an (H, W, 4) uint8 RGBA array."""
    image_path = Path(path)
    try:
        with Image.open(image_path) as image:
            rgba = image.convert("RGBA")
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageLoadError(f"failed to load image {image_path}: {exc}") from exc
    canvas = np.array(rgba, dtype=np.uint8)
    if canvas.ndim != 3 or canvas.shape[2] != 4 or canvas.shape[0] == 0 or canvas.shape[1] == 0:
        raise ImageLoadError(f"image {image_path} decoded to invalid shape {canvas.shape}")
    return canvas


def save_png(canvas: np.ndarray, path: str | Path) -> bool:
    out_path = Path(path)
    LOGGER.info("Attempting to save screenshot to %s", out_path)
    if canvas.dtype != np.uint8 or canvas.ndim != 3 or canvas.shape[2] != 4:
        LOGGER.error("Failed to save %s: canvas must be uint8 with shape (H, W, 4)", out_path)
        return False
    try:
        Image.fromarray(np.ascontiguousarray(canvas)).save(out_path, format="PNG")
    except (OSError, ValueError) as exc:
        LOGGER.error("Failed to save surface as PNG %s: %s", out_path, exc)
        return False
    LOGGER.info("Screenshot saved successfully to %s", out_path)
    return True
