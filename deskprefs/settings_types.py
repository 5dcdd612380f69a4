"""Structured values the application keeps in its settings file."""

from __future__ import annotations

from dataclasses import dataclass

from deskprefs_core import KnownTypes


@dataclass(slots=True, frozen=True)
class ShortcutKey:
    """A global hotkey: virtual key code plus modifier key codes."""

    key: int
    modifiers: tuple[int, ...] = ()


@dataclass(slots=True)
class WindowPlacement:
    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0
    maximized: bool = False


KNOWN_TYPES = KnownTypes([ShortcutKey, WindowPlacement])

__all__ = ["KNOWN_TYPES", "ShortcutKey", "WindowPlacement"]
