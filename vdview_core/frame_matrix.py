from __future__ import annotations

import numpy as np
import torch


class FrameMatrix:
    """Last composed viewer frame as an RGBA255 tensor, replaced whole on each commit."""

    def __init__(self, height: int, width: int, background: tuple[int, int, int, int] = (0, 0, 0, 255)) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        self.height = height
        self.width = width
        self._revision = 0
        bg = torch.tensor(background, dtype=torch.uint8).view(1, 1, 4)
        self._frame = bg.expand(height, width, 4).clone()

    @property
    def revision(self) -> int:
        return self._revision

    def read_snapshot(self) -> torch.Tensor:
        return self._frame.clone()

    def commit(self, canvas: np.ndarray) -> int:
        """Replace the frame with a copy of ``canvas``; returns the new revision.

        A canvas of the wrong dtype or shape raises and leaves the previous
        frame and revision untouched.
        """
        if canvas.dtype != np.uint8:
            raise ValueError("canvas must be uint8")
        expected = (self.height, self.width, 4)
        if tuple(canvas.shape) != expected:
            raise ValueError(f"canvas has invalid shape: {tuple(canvas.shape)} expected {expected}")
        self._frame = torch.from_numpy(np.array(canvas, copy=True))
        self._revision += 1
        return self._revision
