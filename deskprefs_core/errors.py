"""Exception hierarchy shared by every settings component."""

from __future__ import annotations


class SettingsError(RuntimeError):
    """Base class for settings store failures."""


class PathResolutionError(SettingsError):
    """Raised when the host cannot supply a base data directory."""


class DirectoryCreationError(SettingsError):
    """Raised when the storage directory cannot be created."""


class SerializationError(SettingsError, ValueError):
    """Raised for malformed or type-disallowed settings content."""


class FileAccessError(SettingsError, OSError):
    """Raised when reading or writing a settings file fails."""


__all__ = [
    "SettingsError",
    "PathResolutionError",
    "DirectoryCreationError",
    "SerializationError",
    "FileAccessError",
]
