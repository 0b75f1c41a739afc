"""IO helpers: pixel buffer adapters and screen capture."""
from .pixels import PixelBufferError, load_rgba, to_rgba

__all__ = ["PixelBufferError", "load_rgba", "to_rgba"]
