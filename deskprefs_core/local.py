"""File-backed settings provider with one-time migration from a legacy location."""

from __future__ import annotations

import enum
import logging
from datetime import timedelta
from pathlib import Path
from typing import ClassVar, Iterable

from .backends.base import PathLike
from .backends.local import LocalFileBackend
from .errors import FileAccessError, PathResolutionError, SerializationError
from .known_types import KnownTypes
from .paths import storage_path
from .provider import DictionaryProvider
from .serializers import Serializer

LOGGER = logging.getLogger(__name__)

DEFAULT_FILENAME = "Settings.xml"
DEFAULT_THROTTLE = timedelta(milliseconds=1500)


class LoadOutcome(enum.Enum):
    CURRENT = "current"
    MIGRATED = "migrated"
    EMPTY = "empty"


class LocalSettingsProvider(DictionaryProvider):
    """Settings stored at ``<local-app-data>/<vendor>/<product>/<filename>``.

    The storage directory is resolved once, here in the constructor. If that
    fails the provider stays unavailable for its whole lifetime: saves are
    skipped and loads come back empty.
    """

    # Debounce interval for callers that watch :attr:`file_path` for changes.
    file_system_handler_throttle: ClassVar[timedelta] = DEFAULT_THROTTLE

    def __init__(
        self,
        vendor: str,
        product: str,
        *,
        original_vendor: str | None = None,
        original_product: str | None = None,
        filename: str = DEFAULT_FILENAME,
        root: PathLike | None = None,
        serializer: Serializer | None = None,
        known_types: KnownTypes | Iterable[type] = (),
    ) -> None:
        backend = LocalFileBackend.for_location(root, vendor, product, filename, serializer)
        super().__init__(backend, known_types)
        self._local_backend = backend
        self._root = root
        self._filename = filename
        self._original_vendor = original_vendor
        self._original_product = original_product
        self._available = backend.available

    @property
    def available(self) -> bool:
        return self._available

    @property
    def file_path(self) -> Path | None:
        return self._local_backend.target

    @property
    def supported_formats(self) -> str:
        return self._local_backend.serializer.file_filter

    @property
    def legacy_path(self) -> Path | None:
        """Where a previous vendor/product identity kept its settings."""
        if not self._original_vendor or not self._original_product:
            return None
        try:
            return storage_path(self._root, self._original_vendor, self._original_product, self._filename)
        except PathResolutionError as exc:
            LOGGER.debug("No legacy settings location: %s", exc)
            return None

    async def load_or_migrate_async(self) -> LoadOutcome:
        if self._available and self._local_backend.default_exists():
            await self.load_async()
            return LoadOutcome.CURRENT

        legacy = self.legacy_path
        if legacy is not None and self._local_backend.exists(legacy):
            try:
                await self.import_async(legacy)
            except (SerializationError, FileAccessError) as exc:
                LOGGER.warning("Could not migrate settings from %s: %s", legacy, exc)
            else:
                await self.save_async()
                LOGGER.info("Migrated settings from %s to %s", legacy, self.file_path or "memory only")
                return LoadOutcome.MIGRATED

        await self.load_async()
        return LoadOutcome.EMPTY


__all__ = ["DEFAULT_FILENAME", "DEFAULT_THROTTLE", "LoadOutcome", "LocalSettingsProvider"]
