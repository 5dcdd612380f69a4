"""Composition root: one settings provider per process."""

from __future__ import annotations

import logging
from functools import lru_cache

from deskprefs_core import KnownTypes, LoadOutcome, LocalSettingsProvider, SettingsError, get_serializer

from .config import StoreConfig, load_config
from .settings_types import KNOWN_TYPES

LOGGER = logging.getLogger(__name__)


def create_provider(
    config: StoreConfig | None = None,
    known_types: KnownTypes = KNOWN_TYPES,
) -> LocalSettingsProvider:
    """Build a provider from *config* without caching it."""

    config = config or load_config()
    LocalSettingsProvider.file_system_handler_throttle = config.throttle
    return LocalSettingsProvider(
        config.vendor,
        config.product,
        original_vendor=config.original_vendor,
        original_product=config.original_product,
        filename=config.filename,
        root=config.data_home,
        serializer=get_serializer(config.format),
        known_types=known_types,
    )


@lru_cache(maxsize=1)
def get_provider() -> LocalSettingsProvider:
    """Return the process-wide provider, creating it on first use."""

    LOGGER.debug("Initialising settings provider")
    return create_provider()


def reset_provider() -> None:
    """Drop the cached provider; the next :func:`get_provider` builds a new one."""

    if get_provider.cache_info().currsize:
        get_provider().close()
    get_provider.cache_clear()


async def bootstrap_async(provider: LocalSettingsProvider) -> LoadOutcome:
    """Load or migrate settings without ever blocking application startup."""

    try:
        outcome = await provider.load_or_migrate_async()
    except SettingsError as exc:
        LOGGER.warning("Starting with empty settings: %s", exc)
        provider.replace({})
        return LoadOutcome.EMPTY
    LOGGER.info("Settings ready (%s, %d entries)", outcome.value, len(provider))
    return outcome


__all__ = ["bootstrap_async", "create_provider", "get_provider", "reset_provider"]
