from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import time
from typing import Callable

import numpy as np

from vdview_raster.image_io import save_png
from vdview_raster.scene_renderer import RasterStyle, render_scene
from vdview_script.scene import Scene

from .config import DEFAULT_SCREENSHOT_PATH, DEFAULT_TITLE, ViewerConfig
from .events import BUTTON_LEFT, ViewerEvent, ViewerEventSource
from .frame_matrix import FrameMatrix
from .frame_rate_controller import FrameRateController
from .targets.base import DisplayFrame, RenderTarget

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerContext:
    """Per-session viewer state passed explicitly to rendering and targets."""

    width: int
    height: int
    style: RasterStyle = field(default_factory=RasterStyle)
    screenshot_path: Path = DEFAULT_SCREENSHOT_PATH
    title: str = DEFAULT_TITLE
    target_fps: int = 60

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")

    @classmethod
    def for_image(cls, image: np.ndarray, config: ViewerConfig | None = None) -> "ViewerContext":
        config = config or ViewerConfig()
        height, width = int(image.shape[0]), int(image.shape[1])
        return cls(
            width=width,
            height=height,
            style=config.style(),
            screenshot_path=config.screenshot_path,
            title=config.title,
            target_fps=config.target_fps,
        )


@dataclass(frozen=True)
class ViewerRunResult:
    frames_presented: int
    stopped_by_quit: bool
    stopped_by_target_close: bool


class ViewerSession:
    """Draws a parsed scene over an image once per frame and reacts to input."""

    def __init__(
        self,
        context: ViewerContext,
        image: np.ndarray,
        scene: Scene,
        target: RenderTarget,
        events: ViewerEventSource,
    ) -> None:
        if image.dtype != np.uint8 or image.ndim != 3 or image.shape[2] != 4:
            raise ValueError("image must be uint8 with shape (H, W, 4)")
        if image.shape[0] != context.height or image.shape[1] != context.width:
            raise ValueError(
                f"image shape {image.shape[1]}x{image.shape[0]} does not match context "
                f"{context.width}x{context.height}"
            )
        self.context = context
        self.scene = scene
        self._image = image
        self._target = target
        self._events = events
        self._matrix = FrameMatrix(height=context.height, width=context.width)
        self._quit_requested = False

    @property
    def quit_requested(self) -> bool:
        return self._quit_requested

    @property
    def matrix(self) -> FrameMatrix:
        return self._matrix

    def compose_frame(self) -> np.ndarray:
        canvas = self._image.copy()
        render_scene(canvas, self.scene, self.context.style)
        return canvas

    def render_frame(self) -> DisplayFrame:
        revision = self._matrix.commit(self.compose_frame())
        frame = DisplayFrame(
            revision=revision,
            width=self.context.width,
            height=self.context.height,
            rgba=self._matrix.read_snapshot(),
        )
        self._target.present_frame(frame)
        return frame

    def handle_event(self, event: ViewerEvent) -> None:
        if event.event_type == "quit":
            LOGGER.info("Quit event received. Quitting...")
            self._quit_requested = True
        elif event.event_type == "pointer_move":
            self._target.set_title(f"{self.context.title} - Cursor: ({event.x}, {event.y})")
        elif event.event_type == "pointer_down":
            if event.button == BUTTON_LEFT:
                LOGGER.info("Clicked at: (%s, %s)", event.x, event.y)
        elif event.event_type == "key_down":
            self._handle_key(event.key or "")
        else:
            LOGGER.debug("Ignoring event type %s", event.event_type)

    def save_screenshot(self, path: str | Path | None = None) -> bool:
        out_path = Path(path) if path is not None else self.context.screenshot_path
        if self._matrix.revision == 0:
            self._matrix.commit(self.compose_frame())
        return save_png(self._matrix.read_snapshot().numpy(), out_path)

    def run(
        self,
        max_frames: int | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ) -> ViewerRunResult:
        if max_frames is not None and max_frames <= 0:
            raise ValueError("max_frames must be > 0")
        pacing = FrameRateController(target_fps=self.context.target_fps)
        frames = 0
        closed = False
        self._target.start()
        try:
            while True:
                started_at = clock()
                self._target.pump_events()
                if self._target.should_close():
                    closed = True
                    break
                for event in self._events.poll():
                    self.handle_event(event)
                if self._quit_requested:
                    break
                self.render_frame()
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
                sleep(pacing.compute_sleep(started_at, clock()))
        finally:
            self._target.stop()
        return ViewerRunResult(
            frames_presented=frames,
            stopped_by_quit=self._quit_requested,
            stopped_by_target_close=closed,
        )

    def _handle_key(self, key: str) -> None:
        LOGGER.debug("Key pressed: %r", key)
        key = key.lower()
        if key == "q":
            LOGGER.info("'q' key pressed. Quitting...")
            self._quit_requested = True
        elif key == "s":
            if not self.save_screenshot():
                LOGGER.error("Screenshot failed.")
