from __future__ import annotations

import logging

from PIL import Image

from vdview_core.events import QueuedEventSource, key_down, pointer_down, pointer_move, quit_event

from .base import DisplayFrame, RenderTarget

LOGGER = logging.getLogger(__name__)


class TkTarget(RenderTarget):
    """Shows frames in a Tk window and forwards its input into an event queue."""

    def __init__(self, width: int, height: int, title: str = "Image Viewer") -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = width
        self.height = height
        self.events = QueuedEventSource()
        self._title = title
        self._root = None
        self._label = None
        self._photo = None
        self._closed = False

    def start(self) -> None:
        import tkinter as tk

        root = tk.Tk()
        root.title(self._title)
        root.geometry(f"{self.width}x{self.height}")
        root.resizable(False, False)
        label = tk.Label(root, borderwidth=0, highlightthickness=0)
        label.pack()
        label.bind("<Motion>", lambda e: self.events.push(pointer_move(int(e.x), int(e.y))))
        label.bind("<ButtonPress>", lambda e: self.events.push(pointer_down(int(e.x), int(e.y), int(e.num))))
        root.bind("<KeyPress>", self._on_key)
        root.protocol("WM_DELETE_WINDOW", self._on_close)
        self._root = root
        self._label = label
        self._closed = False

    def present_frame(self, frame: DisplayFrame) -> None:
        if self._root is None or self._label is None:
            raise RuntimeError("tk target not started")
        from PIL import ImageTk

        image = Image.fromarray(frame.rgba.numpy())
        self._photo = ImageTk.PhotoImage(image, master=self._root)
        self._label.configure(image=self._photo)

    def stop(self) -> None:
        if self._root is not None:
            self._root.destroy()
        self._root = None
        self._label = None
        self._photo = None

    def set_title(self, title: str) -> None:
        self._title = title
        if self._root is not None:
            self._root.title(title)

    def pump_events(self) -> None:
        if self._root is None or self._closed:
            return
        self._root.update()

    def should_close(self) -> bool:
        return self._closed

    def _on_key(self, event) -> None:
        key = str(event.char or event.keysym or "")
        LOGGER.debug("Key pressed: %s", event.keysym)
        self.events.push(key_down(key))

    def _on_close(self) -> None:
        self._closed = True
        self.events.push(quit_event())
