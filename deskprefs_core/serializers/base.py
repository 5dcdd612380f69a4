"""Serializer contract for whole-file settings codecs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from ..errors import SerializationError
from ..known_types import KnownTypes


class Serializer(ABC):
    """Encode and decode a ``dict[str, Any]`` restricted to :class:`KnownTypes`."""

    name: str = ""
    extension: str = ""
    description: str = ""

    @abstractmethod
    def dumps(self, data: Mapping[str, Any], known_types: KnownTypes) -> bytes:
        """Encode the whole mapping to bytes."""

    @abstractmethod
    def loads(self, raw: bytes, known_types: KnownTypes) -> dict[str, Any]:
        """Decode bytes produced by :meth:`dumps`."""

    @property
    def file_filter(self) -> str:
        """File-dialog filter string, e.g. ``XML (*.xml)|*.xml``."""
        return f"{self.description} (*{self.extension})|*{self.extension}"

    def check_encodable(self, data: Mapping[str, Any], known_types: KnownTypes) -> None:
        for key, value in data.items():
            if not isinstance(key, str):
                raise SerializationError(f"Settings keys must be strings, got {type(key).__name__}")
            if not known_types.is_allowed(value):
                raise SerializationError(f"Value for {key!r} uses a type outside the known types")


__all__ = ["Serializer"]
