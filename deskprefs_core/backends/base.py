"""Storage capability behind :class:`~deskprefs_core.provider.DictionaryProvider`."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, Mapping

from ..known_types import KnownTypes

PathLike = str | os.PathLike[str]


class StorageBackend(ABC):
    """Four byte-level primitives a provider delegates to.

    Loads return ``None`` when the target does not exist. Saves overwrite the
    whole target. Both are synchronous; the provider schedules them off the
    caller's thread.
    """

    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    def save_default(self, data: Mapping[str, Any], known_types: KnownTypes) -> None: ...

    @abstractmethod
    def save_to(self, data: Mapping[str, Any], path: PathLike, known_types: KnownTypes) -> None: ...

    @abstractmethod
    def load_default(self, known_types: KnownTypes) -> dict[str, Any] | None: ...

    @abstractmethod
    def load_from(self, path: PathLike, known_types: KnownTypes) -> dict[str, Any] | None: ...

    @abstractmethod
    def default_exists(self) -> bool: ...

    @abstractmethod
    def exists(self, path: PathLike) -> bool: ...


__all__ = ["PathLike", "StorageBackend"]
