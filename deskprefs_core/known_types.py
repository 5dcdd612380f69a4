"""Allow-list of value types the serializers may materialize."""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Iterator, Mapping

PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, str, type(None))


class KnownTypes:
    """Immutable registry of structured types eligible for deserialization.

    Primitives and the plain containers are always allowed. Additional types
    must be dataclasses; they are stored under their qualified name so that a
    settings file can only ever name a type the owner registered up front.
    """

    __slots__ = ("_by_name",)

    def __init__(self, types: Iterable[type] = ()) -> None:
        by_name: dict[str, type] = {}
        for cls in types:
            if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
                raise TypeError(f"{cls!r} is not a dataclass type")
            name = self.name_of(cls)
            if name in by_name and by_name[name] is not cls:
                raise ValueError(f"Duplicate known type name: {name}")
            by_name[name] = cls
        object.__setattr__(self, "_by_name", by_name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("KnownTypes is immutable")

    def __contains__(self, cls: object) -> bool:
        return isinstance(cls, type) and self._by_name.get(self.name_of(cls)) is cls

    def __iter__(self) -> Iterator[type]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"KnownTypes({sorted(self._by_name)!r})"

    @staticmethod
    def name_of(cls: type) -> str:
        return f"{cls.__module__}.{cls.__qualname__}"

    def lookup(self, name: str) -> type | None:
        return self._by_name.get(name)

    def is_allowed(self, value: Any) -> bool:
        """Return True when *value* (recursively) only uses permitted types."""

        if isinstance(value, PRIMITIVE_TYPES):
            return True
        if isinstance(value, (list, tuple)):
            return all(self.is_allowed(item) for item in value)
        if isinstance(value, dict):
            return all(isinstance(key, str) and self.is_allowed(item) for key, item in value.items())
        if type(value) in self:
            return all(self.is_allowed(item) for item in self.fields_of(value).values())
        return False

    def fields_of(self, value: Any) -> Mapping[str, Any]:
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value) if f.init}


__all__ = ["KnownTypes", "PRIMITIVE_TYPES"]
