"""Storage backends implementing the four provider primitives."""

from .base import StorageBackend
from .local import LocalFileBackend
from .memory import MemoryBackend

__all__ = ["LocalFileBackend", "MemoryBackend", "StorageBackend"]
