from .config import ViewerConfig, config_from_mapping, load_config
from .events import QueuedEventSource, ViewerEvent, ViewerEventSource, key_down, pointer_down, pointer_move, quit_event
from .frame_matrix import FrameMatrix
from .frame_rate_controller import FrameRateController
from .viewer import ViewerContext, ViewerRunResult, ViewerSession

__all__ = [
    "FrameMatrix",
    "FrameRateController",
    "QueuedEventSource",
    "ViewerConfig",
    "ViewerContext",
    "ViewerEvent",
    "ViewerEventSource",
    "ViewerRunResult",
    "ViewerSession",
    "config_from_mapping",
    "key_down",
    "load_config",
    "pointer_down",
    "pointer_move",
    "quit_event",
]
