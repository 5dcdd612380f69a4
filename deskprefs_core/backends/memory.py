"""In-process backend, handy for tests and for running without a profile."""

from __future__ import annotations

import os
from typing import Any, Mapping

from ..known_types import KnownTypes
from ..serializers import Serializer, XmlSerializer
from .base import PathLike, StorageBackend

DEFAULT_KEY = "<memory>"


class MemoryBackend(StorageBackend):
    """Keeps encoded documents in a dict keyed by path.

    Values still pass through the serializer, so the same type restrictions
    and copy semantics apply as for files on disk.
    """

    def __init__(self, serializer: Serializer | None = None) -> None:
        self.serializer = serializer or XmlSerializer()
        self.files: dict[str, bytes] = {}

    def save_default(self, data: Mapping[str, Any], known_types: KnownTypes) -> None:
        self.files[DEFAULT_KEY] = self.serializer.dumps(data, known_types)

    def save_to(self, data: Mapping[str, Any], path: PathLike, known_types: KnownTypes) -> None:
        self.files[os.fspath(path)] = self.serializer.dumps(data, known_types)

    def load_default(self, known_types: KnownTypes) -> dict[str, Any] | None:
        return self._load(DEFAULT_KEY, known_types)

    def load_from(self, path: PathLike, known_types: KnownTypes) -> dict[str, Any] | None:
        return self._load(os.fspath(path), known_types)

    def default_exists(self) -> bool:
        return DEFAULT_KEY in self.files

    def exists(self, path: PathLike) -> bool:
        return os.fspath(path) in self.files

    def _load(self, key: str, known_types: KnownTypes) -> dict[str, Any] | None:
        raw = self.files.get(key)
        if raw is None:
            return None
        return self.serializer.loads(raw, known_types)


__all__ = ["DEFAULT_KEY", "MemoryBackend"]
