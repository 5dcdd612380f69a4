"""Core settings store: paths, codecs, backends and providers."""

from .backends import LocalFileBackend, MemoryBackend, StorageBackend
from .errors import (
    DirectoryCreationError,
    FileAccessError,
    PathResolutionError,
    SerializationError,
    SettingsError,
)
from .known_types import KnownTypes
from .local import LoadOutcome, LocalSettingsProvider
from .paths import local_app_data_dir, resolve_storage_path, storage_path
from .provider import DictionaryProvider
from .serializers import JsonSerializer, Serializer, XmlSerializer, get_serializer

__all__ = [
    "DictionaryProvider",
    "DirectoryCreationError",
    "FileAccessError",
    "JsonSerializer",
    "KnownTypes",
    "LoadOutcome",
    "LocalFileBackend",
    "LocalSettingsProvider",
    "MemoryBackend",
    "PathResolutionError",
    "SerializationError",
    "Serializer",
    "SettingsError",
    "StorageBackend",
    "XmlSerializer",
    "get_serializer",
    "local_app_data_dir",
    "resolve_storage_path",
    "storage_path",
]
