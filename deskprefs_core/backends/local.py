"""Single-file backend under the per-user data directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

from ..errors import DirectoryCreationError, FileAccessError, PathResolutionError
from ..known_types import KnownTypes
from ..paths import ensure_parent_dir, resolve_storage_path
from ..serializers import Serializer, XmlSerializer
from .base import PathLike, StorageBackend

LOGGER = logging.getLogger(__name__)


class LocalFileBackend(StorageBackend):
    """Reads and writes one settings file.

    A backend built without a target path is unavailable: default saves are
    skipped and default loads report nothing. Explicit-path operations still
    work so that a legacy file can be imported.
    """

    def __init__(self, target: Path | None, serializer: Serializer | None = None) -> None:
        self._target = target
        self.serializer = serializer or XmlSerializer()

    @classmethod
    def for_location(
        cls,
        root: PathLike | None,
        vendor: str,
        product: str,
        filename: str,
        serializer: Serializer | None = None,
    ) -> "LocalFileBackend":
        try:
            target = resolve_storage_path(root, vendor, product, filename)
        except (PathResolutionError, DirectoryCreationError) as exc:
            LOGGER.warning("Settings storage unavailable: %s", exc)
            target = None
        return cls(target, serializer)

    @property
    def available(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> Path | None:
        return self._target

    def save_default(self, data: Mapping[str, Any], known_types: KnownTypes) -> None:
        if self._target is None:
            return
        self.save_to(data, self._target, known_types)

    def save_to(self, data: Mapping[str, Any], path: PathLike, known_types: KnownTypes) -> None:
        target = Path(path)
        try:
            ensure_parent_dir(target)
        except DirectoryCreationError as exc:
            LOGGER.warning("Skipping settings save: %s", exc)
            return
        payload = self.serializer.dumps(data, known_types)
        tmp = target.with_name(target.name + ".tmp")
        try:
            tmp.write_bytes(payload)
            os.replace(tmp, target)
        except OSError as exc:
            _discard(tmp)
            raise FileAccessError(f"Cannot write settings to {target}: {exc}") from exc
        LOGGER.info("Saved %d settings to %s", len(data), target)

    def load_default(self, known_types: KnownTypes) -> dict[str, Any] | None:
        if self._target is None:
            return None
        return self.load_from(self._target, known_types)

    def load_from(self, path: PathLike, known_types: KnownTypes) -> dict[str, Any] | None:
        target = Path(path)
        if target.parent == target:
            return None
        try:
            raw = target.read_bytes()
        except FileNotFoundError:
            LOGGER.debug("No settings file at %s", target)
            return None
        except OSError as exc:
            raise FileAccessError(f"Cannot read settings from {target}: {exc}") from exc
        data = self.serializer.loads(raw, known_types)
        LOGGER.debug("Loaded %d settings from %s", len(data), target)
        return data

    def default_exists(self) -> bool:
        return self._target is not None and self._target.is_file()

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError:  # pragma: no cover - best effort cleanup
        LOGGER.warning("Failed to remove temporary settings file: %s", tmp)


__all__ = ["LocalFileBackend"]
