"""JSON settings codec.

Plain JSON values are written as-is. Tuples, registered dataclasses and dicts
that would collide with the ``__type__`` marker are wrapped so they survive a
round trip.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..errors import SerializationError
from ..known_types import KnownTypes
from .base import Serializer

TYPE_MARKER = "__type__"


class JsonSerializer(Serializer):
    name = "json"
    extension = ".json"
    description = "JSON"

    def dumps(self, data: Mapping[str, Any], known_types: KnownTypes) -> bytes:
        self.check_encodable(data, known_types)
        payload = {key: _encode(value, known_types) for key, value in data.items()}
        try:
            text = json.dumps(payload, indent=2, sort_keys=True, allow_nan=False)
        except ValueError as exc:
            raise SerializationError(f"Cannot encode settings as JSON: {exc}") from exc
        return text.encode("utf-8")

    def loads(self, raw: bytes, known_types: KnownTypes) -> dict[str, Any]:
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SerializationError(f"Invalid JSON settings document: {exc}") from exc
        if not isinstance(payload, dict):
            raise SerializationError("Settings document root is not an object")
        return {key: _decode(value, known_types) for key, value in payload.items()}


def _encode(value: Any, known_types: KnownTypes) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, list):
        return [_encode(item, known_types) for item in value]
    if isinstance(value, tuple):
        return {TYPE_MARKER: "tuple", "items": [_encode(item, known_types) for item in value]}
    if isinstance(value, dict):
        items = {key: _encode(item, known_types) for key, item in value.items()}
        if TYPE_MARKER in value:
            return {TYPE_MARKER: "dict", "items": items}
        return items
    fields = {name: _encode(item, known_types) for name, item in known_types.fields_of(value).items()}
    return {TYPE_MARKER: KnownTypes.name_of(type(value)), "fields": fields}


def _decode(value: Any, known_types: KnownTypes) -> Any:
    if isinstance(value, list):
        return [_decode(item, known_types) for item in value]
    if not isinstance(value, dict):
        return value
    marker = value.get(TYPE_MARKER)
    if marker is None:
        return {key: _decode(item, known_types) for key, item in value.items()}
    if marker == "tuple":
        return tuple(_decode(item, known_types) for item in _expect(value, "items", list))
    if marker == "dict":
        return {key: _decode(item, known_types) for key, item in _expect(value, "items", dict).items()}
    cls = known_types.lookup(str(marker))
    if cls is None:
        raise SerializationError(f"Type {marker!r} is not a known settings type")
    fields = {key: _decode(item, known_types) for key, item in _expect(value, "fields", dict).items()}
    try:
        return cls(**fields)
    except TypeError as exc:
        raise SerializationError(f"Cannot construct {marker}: {exc}") from exc


def _expect(value: dict[str, Any], key: str, kind: type) -> Any:
    item = value.get(key, kind())
    if not isinstance(item, kind):
        raise SerializationError(f"Expected {kind.__name__} under {key!r} for {value.get(TYPE_MARKER)!r}")
    return item


__all__ = ["JsonSerializer", "TYPE_MARKER"]
