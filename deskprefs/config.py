"""Environment-driven configuration for the settings store."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import timedelta
import logging
import os
from typing import Any, Mapping

from dotenv import load_dotenv

from deskprefs_core.serializers import SERIALIZERS

from .constants import (
    FILE_SYSTEM_HANDLER_THROTTLE_MS,
    ORIGINAL_PRODUCT,
    ORIGINAL_VENDOR,
    PRODUCT,
    SETTINGS_FILENAME,
    SETTINGS_FORMAT,
    VENDOR,
)

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "DESKPREFS_"


@dataclass(slots=True, frozen=True)
class StoreConfig:
    """Where and how the settings file is stored."""

    vendor: str = VENDOR
    product: str = PRODUCT
    original_vendor: str | None = ORIGINAL_VENDOR
    original_product: str | None = ORIGINAL_PRODUCT
    filename: str = SETTINGS_FILENAME
    data_home: str | None = None
    format: str = SETTINGS_FORMAT
    throttle_ms: int = FILE_SYSTEM_HANDLER_THROTTLE_MS

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "StoreConfig":
        """Create :class:`StoreConfig` from any mapping of lower-case keys."""
        return cls(
            vendor=str(payload.get("vendor") or VENDOR),
            product=str(payload.get("product") or PRODUCT),
            original_vendor=_coerce_optional_str(payload.get("original_vendor", ORIGINAL_VENDOR)),
            original_product=_coerce_optional_str(payload.get("original_product", ORIGINAL_PRODUCT)),
            filename=str(payload.get("filename") or SETTINGS_FILENAME),
            data_home=_coerce_optional_str(payload.get("data_home", payload.get("home"))),
            format=_coerce_format(payload.get("format")),
            throttle_ms=_coerce_int(payload.get("throttle_ms"), FILE_SYSTEM_HANDLER_THROTTLE_MS),
        )

    @property
    def throttle(self) -> timedelta:
        return timedelta(milliseconds=self.throttle_ms)

    def to_mapping(self) -> dict[str, Any]:
        return asdict(self)


def load_config(environ: Mapping[str, str] | None = None) -> StoreConfig:
    """Read ``DESKPREFS_*`` variables (after loading a ``.env`` file)."""

    if environ is None:
        load_dotenv()
        environ = os.environ
    payload = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }
    config = StoreConfig.from_mapping(payload)
    LOGGER.debug("Settings store configuration: %s", config)
    return config


def _coerce_optional_str(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return str(value)


def _coerce_format(value: Any) -> str:
    if value in (None, ""):
        return SETTINGS_FORMAT
    name = str(value).lower()
    if name not in SERIALIZERS:
        LOGGER.warning("Ignoring unknown settings format %r; using %s", value, SETTINGS_FORMAT)
        return SETTINGS_FORMAT
    return name


def _coerce_int(value: Any, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring invalid integer setting %r; using %s", value, default)
        return default
    if number < 0:
        LOGGER.warning("Ignoring negative integer setting %r; using %s", value, default)
        return default
    return number


__all__ = ["ENV_PREFIX", "StoreConfig", "load_config"]
