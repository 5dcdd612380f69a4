"""Storage path resolution for the settings file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_data_dir

from .errors import DirectoryCreationError, PathResolutionError

LOGGER = logging.getLogger(__name__)


def local_app_data_dir() -> Path:
    """Return the per-user local application data root.

    This is ``%LOCALAPPDATA%`` on Windows, ``~/.local/share`` on Linux and
    ``~/Library/Application Support`` on macOS.
    """

    try:
        root = user_data_dir(appname=None, appauthor=False, roaming=False)
    except (KeyError, RuntimeError, OSError) as exc:
        raise PathResolutionError("Unable to determine the local application data directory") from exc
    if not root:
        raise PathResolutionError("Unable to determine the local application data directory")
    return Path(root)


def storage_path(root: str | os.PathLike[str] | None, vendor: str, product: str, filename: str) -> Path:
    """Join the path segments without touching the filesystem."""

    base = Path(root).expanduser() if root is not None else local_app_data_dir()
    return (base / vendor / product / filename).absolute()


def ensure_parent_dir(path: Path) -> Path:
    directory = path.parent
    if directory == path:
        raise DirectoryCreationError(f"{path} has no parent directory")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(f"Cannot create settings directory {directory}: {exc}") from exc
    return directory


def resolve_storage_path(
    root: str | os.PathLike[str] | None,
    vendor: str,
    product: str,
    filename: str,
) -> Path:
    """Resolve ``<root>/<vendor>/<product>/<filename>`` and create its directory.

    Passing ``root=None`` uses :func:`local_app_data_dir`. Calling this twice
    with the same inputs is safe.
    """

    path = storage_path(root, vendor, product, filename)
    ensure_parent_dir(path)
    LOGGER.debug("Resolved settings path %s", path)
    return path


__all__ = [
    "ensure_parent_dir",
    "local_app_data_dir",
    "resolve_storage_path",
    "storage_path",
]
