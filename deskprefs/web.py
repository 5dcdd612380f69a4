# Part of deskprefs: Persistent desktop settings with legacy migration | Copyright (c) 2025 | License: MIT
"""Flask JSON API over the settings provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from flask import Blueprint, Flask, Response, current_app, jsonify, request

from deskprefs_core import FileAccessError, LocalSettingsProvider, SerializationError

from .app import bootstrap_async, get_provider

LOGGER = logging.getLogger(__name__)

API = Blueprint("api", __name__, url_prefix="/api")


def create_app(
    config: dict[str, Any] | None = None,
    provider: LocalSettingsProvider | None = None,
) -> Flask:
    app = Flask(__name__)
    app.config.update(
        MAX_CONTENT_LENGTH=1 * 1024 * 1024,
        DESKPREFS_ENABLE_CORS=False,
        DESKPREFS_CORS_ORIGIN="*",
    )
    if config:
        app.config.update(config)

    app.register_blueprint(API)

    @app.after_request
    def apply_cors_headers(response: Response) -> Response:
        if app.config.get("DESKPREFS_ENABLE_CORS"):
            response.headers.setdefault("Access-Control-Allow-Origin", app.config["DESKPREFS_CORS_ORIGIN"])
            response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
            response.headers.setdefault("Access-Control-Allow-Methods", "GET,PUT,OPTIONS")
        return response

    if provider is None:
        provider = get_provider()
    if not provider.loaded:
        asyncio.run(bootstrap_async(provider))
    app.config["DESKPREFS_PROVIDER"] = provider
    LOGGER.info("Serving settings from %s", provider.file_path or "memory")
    return app


@API.get("/health")
def health() -> Response:
    return jsonify({"ok": True, "available": current_provider().available})


@API.get("/settings")
def api_get_settings() -> Response:
    return jsonify(current_provider().snapshot())


@API.put("/settings")
def api_replace_settings() -> Response:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return json_error("invalid_payload", "Expected a JSON object of settings", 400)

    provider = current_provider()
    previous = provider.snapshot()
    try:
        provider.replace(payload)
    except TypeError as exc:
        return json_error("invalid_settings", str(exc), 400)

    try:
        asyncio.run(provider.save_async())
    except (FileAccessError, SerializationError) as exc:
        LOGGER.warning("Failed to save settings: %s", exc)
        provider.replace(previous)
        return json_error("save_failed", str(exc), 500)
    return jsonify(provider.snapshot())


@API.get("/settings/location")
def api_settings_location() -> Response:
    provider = current_provider()
    legacy = provider.legacy_path
    return jsonify(
        {
            "available": provider.available,
            "path": str(provider.file_path) if provider.file_path else None,
            "legacyPath": str(legacy) if legacy else None,
            "supportedFormats": provider.supported_formats,
            "throttleMs": int(provider.file_system_handler_throttle.total_seconds() * 1000),
        }
    )


def current_provider() -> LocalSettingsProvider:
    provider = current_app.config.get("DESKPREFS_PROVIDER")
    if isinstance(provider, LocalSettingsProvider):
        return provider
    provider = get_provider()
    current_app.config["DESKPREFS_PROVIDER"] = provider
    return provider


def json_error(code: str, message: str, status: int) -> Response:
    payload = {"error": {"code": code, "message": message}}
    return jsonify(payload), status


if __name__ == "__main__":  # pragma: no cover - manual execution
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="127.0.0.1", port=8080)
