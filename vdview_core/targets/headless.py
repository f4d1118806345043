from __future__ import annotations

from dataclasses import dataclass, field

from .base import DisplayFrame, RenderTarget


@dataclass
class HeadlessTarget(RenderTarget):
    frames_presented: int = 0
    started: bool = False
    title: str = ""
    last_frame: DisplayFrame | None = field(default=None, repr=False)

    def start(self) -> None:
        self.started = True

    def present_frame(self, frame: DisplayFrame) -> None:
        if not self.started:
            raise RuntimeError("headless target not started")
        self.frames_presented += 1
        self.last_frame = frame

    def stop(self) -> None:
        self.started = False

    def set_title(self, title: str) -> None:
        self.title = title
