"""Application wiring for the deskprefs settings store."""

from .app import bootstrap_async, create_provider, get_provider, reset_provider
from .config import StoreConfig, load_config
from .settings_types import KNOWN_TYPES, ShortcutKey, WindowPlacement

__all__ = [
    "KNOWN_TYPES",
    "ShortcutKey",
    "StoreConfig",
    "WindowPlacement",
    "bootstrap_async",
    "create_provider",
    "get_provider",
    "load_config",
    "reset_provider",
]
