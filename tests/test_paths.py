from __future__ import annotations

import pytest

from deskprefs_core import DirectoryCreationError, PathResolutionError
from deskprefs_core.paths import local_app_data_dir, resolve_storage_path, storage_path


def test_resolve_joins_segments_and_creates_directory(tmp_path):
    path = resolve_storage_path(tmp_path, "Vendor", "Product", "Settings.xml")

    assert path == tmp_path / "Vendor" / "Product" / "Settings.xml"
    assert path.is_absolute()
    assert path.parent.is_dir()
    assert not path.exists()


def test_resolve_is_idempotent(tmp_path):
    first = resolve_storage_path(tmp_path, "Vendor", "Product", "Settings.xml")
    second = resolve_storage_path(tmp_path, "Vendor", "Product", "Settings.xml")
    assert first == second


def test_storage_path_has_no_side_effects(tmp_path):
    path = storage_path(tmp_path, "Old", "Thing", "Settings.xml")
    assert path == tmp_path / "Old" / "Thing" / "Settings.xml"
    assert not (tmp_path / "Old").exists()


def test_resolve_fails_when_directory_cannot_be_created(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DirectoryCreationError):
        resolve_storage_path(blocker, "Vendor", "Product", "Settings.xml")


def test_local_app_data_dir_ignores_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("DESKPREFS_HOME", str(tmp_path / "custom"))
    monkeypatch.setattr("deskprefs_core.paths.user_data_dir", lambda **_: str(tmp_path / "platform"))
    assert local_app_data_dir() == tmp_path / "platform"


def test_local_app_data_dir_uses_platformdirs(monkeypatch, tmp_path):
    monkeypatch.delenv("DESKPREFS_HOME", raising=False)
    monkeypatch.setattr("deskprefs_core.paths.user_data_dir", lambda **_: str(tmp_path / "platform"))
    assert local_app_data_dir() == tmp_path / "platform"


def test_unresolvable_root_raises(monkeypatch):
    monkeypatch.delenv("DESKPREFS_HOME", raising=False)

    def broken(**_):
        raise KeyError("HOME")

    monkeypatch.setattr("deskprefs_core.paths.user_data_dir", broken)
    with pytest.raises(PathResolutionError):
        resolve_storage_path(None, "Vendor", "Product", "Settings.xml")
