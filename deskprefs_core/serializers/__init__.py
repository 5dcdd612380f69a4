"""Pluggable codecs for the settings file."""

from .base import Serializer
from .json_format import JsonSerializer
from .xml_format import XmlSerializer

SERIALIZERS: dict[str, type[Serializer]] = {
    XmlSerializer.name: XmlSerializer,
    JsonSerializer.name: JsonSerializer,
}


def get_serializer(name: str) -> Serializer:
    """Return a serializer instance for ``xml`` or ``json``."""
    try:
        return SERIALIZERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown settings format: {name}") from None


__all__ = ["JsonSerializer", "SERIALIZERS", "Serializer", "XmlSerializer", "get_serializer"]
