"""In-memory settings mapping backed by a pluggable storage backend."""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Iterator, Mapping, TypeVar

from .backends.base import PathLike, StorageBackend
from .known_types import KnownTypes

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class DictionaryProvider:
    """Owns one settings mapping and moves it to and from storage as a whole.

    Every I/O operation is queued on a private single-worker executor, so at
    most one file operation runs at a time and they complete in the order they
    were awaited. The mapping is only replaced after a load succeeds; a failing
    load or import leaves it untouched.
    """

    def __init__(
        self,
        backend: StorageBackend,
        known_types: KnownTypes | Iterable[type] = (),
    ) -> None:
        self._backend = backend
        self._known_types = known_types if isinstance(known_types, KnownTypes) else KnownTypes(known_types)
        self._settings: dict[str, Any] = {}
        self._loaded = False
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deskprefs-io")

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def known_types(self) -> KnownTypes:
        return self._known_types

    @property
    def loaded(self) -> bool:
        """True once a load or import has completed."""
        return self._loaded

    # Accessors ----------------------------------------------------------
    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError("Settings keys must be strings")
        if not self._known_types.is_allowed(value):
            raise TypeError(f"{type(value).__name__} is not a known settings type")
        with self._lock:
            self._settings[key] = value

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._settings.pop(key, _MISSING) is not _MISSING

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._settings)

    def snapshot(self) -> dict[str, Any]:
        """Return a shallow copy of the current mapping."""
        with self._lock:
            return dict(self._settings)

    def replace(self, data: Mapping[str, Any]) -> None:
        """Swap in a whole new mapping (validated against the known types)."""
        for key, value in data.items():
            if not isinstance(key, str) or not self._known_types.is_allowed(value):
                raise TypeError(f"Invalid settings entry for {key!r}")
        with self._lock:
            self._settings = dict(data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._settings

    def __len__(self) -> int:
        with self._lock:
            return len(self._settings)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # Asynchronous I/O ---------------------------------------------------
    async def load_async(self) -> None:
        await self._submit(self._load_job, self._backend.load_default)

    async def save_async(self) -> None:
        if not self._backend.available:
            LOGGER.debug("Settings backend unavailable; save skipped")
            return
        await self._submit(self._save_job, self._backend.save_default)

    async def import_async(self, path: PathLike) -> None:
        """Replace the mapping with the contents of *path* without saving it."""
        LOGGER.info("Importing settings from %s", path)
        await self._submit(self._load_job, functools.partial(self._backend.load_from, path))

    async def export_async(self, path: PathLike) -> None:
        """Write the mapping to *path*; the default location is left alone."""
        LOGGER.info("Exporting settings to %s", path)
        await self._submit(self._save_job, functools.partial(self._backend.save_to, path=path))

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    async def _submit(self, job: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(job, *args))

    def _load_job(self, load: Callable[[KnownTypes], dict[str, Any] | None]) -> None:
        data = load(self._known_types)
        with self._lock:
            self._settings = dict(data) if data else {}
            self._loaded = True

    def _save_job(self, save: Callable[..., None]) -> None:
        save(self.snapshot(), known_types=self._known_types)


_MISSING = object()

__all__ = ["DictionaryProvider"]
