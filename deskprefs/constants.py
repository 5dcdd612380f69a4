# Part of deskprefs: Persistent desktop settings with legacy migration | Copyright (c) 2025 | License: MIT
"""Product naming and storage defaults."""

from deskprefs_core.local import DEFAULT_FILENAME, DEFAULT_THROTTLE

VENDOR = "Deskprefs"
PRODUCT = "Deskprefs"

# Identity used before the rename; only ever read from.
ORIGINAL_VENDOR = "DeskTools"
ORIGINAL_PRODUCT = "DeskSettings"

SETTINGS_FILENAME = DEFAULT_FILENAME
SETTINGS_FORMAT = "xml"

FILE_SYSTEM_HANDLER_THROTTLE_MS = int(DEFAULT_THROTTLE.total_seconds() * 1000)

__all__ = [
    "VENDOR",
    "PRODUCT",
    "ORIGINAL_VENDOR",
    "ORIGINAL_PRODUCT",
    "SETTINGS_FILENAME",
    "SETTINGS_FORMAT",
    "FILE_SYSTEM_HANDLER_THROTTLE_MS",
]
