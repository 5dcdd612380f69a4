"""XML settings document codec.

Layout::

    <settings>
      <entry key="Theme"><str>dark</str></entry>
      <entry key="Hotkeys"><list><int>17</int><int>91</int></list></entry>
      <entry key="Window"><object type="app.ui.WindowState">
        <field name="width"><int>640</int></field>
      </object></entry>
    </settings>
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Mapping

from ..errors import SerializationError
from ..known_types import KnownTypes
from .base import Serializer

LOGGER = logging.getLogger(__name__)

ROOT_TAG = "settings"
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XmlSerializer(Serializer):
    name = "xml"
    extension = ".xml"
    description = "XML"

    def __init__(self, indent: bool = True) -> None:
        self.indent = indent

    def dumps(self, data: Mapping[str, Any], known_types: KnownTypes) -> bytes:
        self.check_encodable(data, known_types)
        root = ET.Element(ROOT_TAG)
        for key, value in data.items():
            root.append(self._entry(key, value, known_types))
        if self.indent:
            ET.indent(root)
        # Parsers fold a raw carriage return into a newline, so keep it as a character reference.
        return ET.tostring(root, encoding="utf-8", xml_declaration=True).replace(b"\r", b"&#13;")

    def loads(self, raw: bytes, known_types: KnownTypes) -> dict[str, Any]:
        try:
            root = ET.fromstring(raw)
        except ET.ParseError as exc:
            raise SerializationError(f"Malformed settings document: {exc}") from exc
        if root.tag != ROOT_TAG:
            raise SerializationError(f"Unexpected root element <{root.tag}>")
        data = self._entries(root, known_types)
        LOGGER.debug("Decoded %d settings entries from XML", len(data))
        return data

    # Encoding -----------------------------------------------------------
    def _entry(self, key: str, value: Any, known_types: KnownTypes) -> ET.Element:
        entry = ET.Element("entry", key=_check_text(key))
        entry.append(self._value(value, known_types))
        return entry

    def _value(self, value: Any, known_types: KnownTypes) -> ET.Element:
        if value is None:
            return ET.Element("none")
        if isinstance(value, bool):
            return _leaf("bool", "true" if value else "false")
        if isinstance(value, int):
            return _leaf("int", str(value))
        if isinstance(value, float):
            return _leaf("float", repr(value))
        if isinstance(value, str):
            return _leaf("str", _check_text(value))
        if isinstance(value, (list, tuple)):
            node = ET.Element("list" if isinstance(value, list) else "tuple")
            for item in value:
                node.append(self._value(item, known_types))
            return node
        if isinstance(value, dict):
            node = ET.Element("dict")
            for key, item in value.items():
                node.append(self._entry(key, item, known_types))
            return node
        node = ET.Element("object", type=KnownTypes.name_of(type(value)))
        for field_name, item in known_types.fields_of(value).items():
            field = ET.SubElement(node, "field", name=field_name)
            field.append(self._value(item, known_types))
        return node

    # Decoding -----------------------------------------------------------
    def _entries(self, parent: ET.Element, known_types: KnownTypes) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for entry in parent:
            if entry.tag != "entry" or "key" not in entry.attrib:
                raise SerializationError(f"Expected <entry key=...>, found <{entry.tag}>")
            key = entry.attrib["key"]
            if key in result:
                raise SerializationError(f"Duplicate settings key {key!r}")
            result[key] = self._read_single(entry, known_types)
        return result

    def _read_single(self, holder: ET.Element, known_types: KnownTypes) -> Any:
        children = list(holder)
        if len(children) != 1:
            raise SerializationError(f"<{holder.tag}> must contain exactly one value")
        return self._read(children[0], known_types)

    def _read(self, node: ET.Element, known_types: KnownTypes) -> Any:
        tag = node.tag
        text = node.text or ""
        try:
            if tag == "none":
                return None
            if tag == "bool":
                if text not in ("true", "false"):
                    raise SerializationError(f"Invalid boolean {text!r}")
                return text == "true"
            if tag == "int":
                return int(text)
            if tag == "float":
                return float(text)
        except ValueError as exc:
            if isinstance(exc, SerializationError):
                raise
            raise SerializationError(f"Invalid <{tag}> value {text!r}") from exc
        if tag == "str":
            return text
        if tag == "list":
            return [self._read(child, known_types) for child in node]
        if tag == "tuple":
            return tuple(self._read(child, known_types) for child in node)
        if tag == "dict":
            return self._entries(node, known_types)
        if tag == "object":
            return self._read_object(node, known_types)
        raise SerializationError(f"Unknown value element <{tag}>")

    def _read_object(self, node: ET.Element, known_types: KnownTypes) -> Any:
        type_name = node.attrib.get("type", "")
        cls = known_types.lookup(type_name)
        if cls is None:
            raise SerializationError(f"Type {type_name!r} is not a known settings type")
        fields: dict[str, Any] = {}
        for field in node:
            if field.tag != "field" or "name" not in field.attrib:
                raise SerializationError(f"Expected <field name=...> in {type_name}")
            fields[field.attrib["name"]] = self._read_single(field, known_types)
        try:
            return cls(**fields)
        except TypeError as exc:
            raise SerializationError(f"Cannot construct {type_name}: {exc}") from exc


def _leaf(tag: str, text: str) -> ET.Element:
    node = ET.Element(tag)
    node.text = text
    return node


def _check_text(text: str) -> str:
    if _INVALID_XML_CHARS.search(text):
        raise SerializationError("Text contains characters that cannot be stored in XML")
    return text


__all__ = ["ROOT_TAG", "XmlSerializer"]
