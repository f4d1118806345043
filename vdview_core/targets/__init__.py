from .base import DisplayFrame, RenderTarget
from .headless import HeadlessTarget

__all__ = ["DisplayFrame", "HeadlessTarget", "RenderTarget"]
