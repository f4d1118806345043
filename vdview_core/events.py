from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import time
from typing import Iterable, Literal, Optional, Protocol


EventType = Literal[
    "pointer_move",
    "pointer_down",
    "key_down",
    "quit",
]

BUTTON_LEFT = 1


@dataclass(frozen=True)
class ViewerEvent:
    event_type: EventType
    ts_ns: int
    x: Optional[int] = None
    y: Optional[int] = None
    button: Optional[int] = None
    key: Optional[str] = None


class ViewerEventSource(Protocol):
    def poll(self) -> list[ViewerEvent]:
        ...


class QueuedEventSource:
    """Bounded FIFO of viewer events; oldest events are dropped on overflow."""

    def __init__(self, events: Iterable[ViewerEvent] = (), max_queue_size: int = 1024) -> None:
        if max_queue_size <= 0:
            raise ValueError("max_queue_size must be > 0")
        self._queue: deque[ViewerEvent] = deque(maxlen=max_queue_size)
        self._queue.extend(events)

    def push(self, event: ViewerEvent) -> None:
        self._queue.append(event)

    def poll(self) -> list[ViewerEvent]:
        out = list(self._queue)
        self._queue.clear()
        return out

    def pending_count(self) -> int:
        return len(self._queue)


def pointer_move(x: int, y: int) -> ViewerEvent:
    return ViewerEvent(event_type="pointer_move", ts_ns=time.time_ns(), x=x, y=y)


def pointer_down(x: int, y: int, button: int = BUTTON_LEFT) -> ViewerEvent:
    return ViewerEvent(event_type="pointer_down", ts_ns=time.time_ns(), x=x, y=y, button=button)


def key_down(key: str) -> ViewerEvent:
    return ViewerEvent(event_type="key_down", ts_ns=time.time_ns(), key=key)


def quit_event() -> ViewerEvent:
    return ViewerEvent(event_type="quit", ts_ns=time.time_ns())
