from __future__ import annotations

import os
from pathlib import Path

import pytest

from deskprefs import KNOWN_TYPES, ShortcutKey, WindowPlacement, reset_provider
from deskprefs_core import LocalSettingsProvider, XmlSerializer


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("DESKPREFS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DESKPREFS_HOME", str(tmp_path / "appdata"))
    monkeypatch.setattr("deskprefs.config.load_dotenv", lambda *args, **kwargs: False)
    yield
    reset_provider()


@pytest.fixture()
def data_root(tmp_path) -> Path:
    return tmp_path / "appdata"


@pytest.fixture()
def sample_settings() -> dict:
    return {
        "Theme": "dark",
        "StartupDelay": 3,
        "Opacity": 0.85,
        "NotifyOnSwitch": True,
        "LastWallpaper": None,
        "RecentDesktops": ["Work", "Games", ""],
        "Placement": WindowPlacement(left=10, top=20, width=640, height=480),
        "Hotkeys": {"next": ShortcutKey(key=39, modifiers=(17, 91)), "prev": ShortcutKey(key=37)},
    }


@pytest.fixture()
def make_provider(data_root):
    created: list[LocalSettingsProvider] = []

    def factory(root: Path | None = None, **kwargs) -> LocalSettingsProvider:
        kwargs.setdefault("original_vendor", "OldVendor")
        kwargs.setdefault("original_product", "OldProduct")
        kwargs.setdefault("known_types", KNOWN_TYPES)
        provider = LocalSettingsProvider("NewVendor", "NewProduct", root=root or data_root, **kwargs)
        created.append(provider)
        return provider

    yield factory
    for provider in created:
        provider.close()


@pytest.fixture()
def write_settings():
    def writer(path: Path, data: dict) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(XmlSerializer().dumps(data, KNOWN_TYPES))
        return path

    return writer
