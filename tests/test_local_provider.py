from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from deskprefs import KNOWN_TYPES
from deskprefs_core import FileAccessError, LoadOutcome, LocalSettingsProvider, SerializationError, XmlSerializer


def read_back(path):
    return XmlSerializer().loads(path.read_bytes(), KNOWN_TYPES)


def test_available_provider_exposes_file_path(make_provider, data_root):
    provider = make_provider()

    assert provider.available
    assert provider.file_path == data_root / "NewVendor" / "NewProduct" / "Settings.xml"
    assert provider.file_path.parent.is_dir()
    assert provider.legacy_path == data_root / "OldVendor" / "OldProduct" / "Settings.xml"
    assert provider.supported_formats == "XML (*.xml)|*.xml"


def test_roundtrip_through_file(make_provider, sample_settings):
    provider = make_provider()
    provider.replace(sample_settings)
    asyncio.run(provider.save_async())

    fresh = make_provider()
    asyncio.run(fresh.load_async())
    assert fresh.snapshot() == sample_settings


def test_save_overwrites_whole_file(make_provider):
    provider = make_provider()
    provider.replace({"a": 1, "b": 2})
    asyncio.run(provider.save_async())
    provider.replace({"c": 3})
    asyncio.run(provider.save_async())

    assert read_back(provider.file_path) == {"c": 3}
    assert not provider.file_path.with_name("Settings.xml.tmp").exists()


def test_load_without_file_is_empty(make_provider):
    provider = make_provider()
    asyncio.run(provider.load_async())
    assert provider.snapshot() == {}


def test_current_file_wins_over_legacy(make_provider, write_settings, monkeypatch):
    provider = make_provider()
    write_settings(provider.file_path, {"Theme": "current"})
    legacy = write_settings(provider.legacy_path, {"Theme": "legacy"})

    seen = []
    original = provider.backend.load_from

    def spy(path, known_types):
        seen.append(path)
        return original(path, known_types)

    monkeypatch.setattr(provider.backend, "load_from", spy)

    outcome = asyncio.run(provider.load_or_migrate_async())

    assert outcome is LoadOutcome.CURRENT
    assert provider.get("Theme") == "current"
    assert legacy not in seen


def test_migrates_legacy_settings(make_provider, write_settings, sample_settings):
    provider = make_provider()
    legacy = write_settings(provider.legacy_path, sample_settings)
    legacy_bytes = legacy.read_bytes()

    outcome = asyncio.run(provider.load_or_migrate_async())

    assert outcome is LoadOutcome.MIGRATED
    assert provider.snapshot() == sample_settings
    assert provider.file_path.is_file()
    assert read_back(provider.file_path) == sample_settings
    assert legacy.read_bytes() == legacy_bytes


def test_migration_repeats_until_current_file_exists(make_provider, write_settings):
    provider = make_provider()
    write_settings(provider.legacy_path, {"Theme": "legacy"})
    asyncio.run(provider.load_or_migrate_async())

    provider.set("Theme", "changed")
    asyncio.run(provider.save_async())

    again = make_provider()
    assert asyncio.run(again.load_or_migrate_async()) is LoadOutcome.CURRENT
    assert again.get("Theme") == "changed"


def test_no_legacy_and_no_current(make_provider):
    provider = make_provider()
    outcome = asyncio.run(provider.load_or_migrate_async())

    assert outcome is LoadOutcome.EMPTY
    assert provider.snapshot() == {}
    assert not provider.file_path.exists()


def test_migration_disabled_without_original_identity(make_provider, write_settings, data_root):
    provider = make_provider(original_vendor=None)
    write_settings(data_root / "OldVendor" / "OldProduct" / "Settings.xml", {"Theme": "legacy"})

    assert provider.legacy_path is None
    assert asyncio.run(provider.load_or_migrate_async()) is LoadOutcome.EMPTY


def test_corrupt_legacy_file_falls_back_to_empty(make_provider):
    provider = make_provider()
    provider.legacy_path.parent.mkdir(parents=True)
    provider.legacy_path.write_text("<settings><oops", encoding="utf-8")

    outcome = asyncio.run(provider.load_or_migrate_async())

    assert outcome is LoadOutcome.EMPTY
    assert provider.snapshot() == {}
    assert not provider.file_path.exists()


def test_corrupt_current_file_propagates(make_provider):
    provider = make_provider()
    provider.file_path.write_text("<settings><oops", encoding="utf-8")

    with pytest.raises(SerializationError):
        asyncio.run(provider.load_or_migrate_async())


def test_unreadable_target_raises_file_access_error(make_provider):
    provider = make_provider()
    provider.file_path.mkdir()

    with pytest.raises(FileAccessError):
        asyncio.run(provider.load_async())


def test_unavailable_provider_is_inert(make_provider, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    provider = make_provider(root=blocker)

    assert provider.available is False
    assert provider.file_path is None

    provider.set("Theme", "dark")
    asyncio.run(provider.save_async())
    asyncio.run(provider.load_async())

    assert provider.snapshot() == {}
    assert blocker.read_text(encoding="utf-8") == ""
    assert provider.available is False


def test_unavailable_provider_still_imports_legacy(make_provider, write_settings, data_root):
    data_root.mkdir(parents=True)
    (data_root / "NewVendor").write_text("", encoding="utf-8")
    legacy = write_settings(data_root / "OldVendor" / "OldProduct" / "Settings.xml", {"Theme": "legacy"})

    provider = make_provider()
    assert not provider.available

    outcome = asyncio.run(provider.load_or_migrate_async())

    assert outcome is LoadOutcome.MIGRATED
    assert provider.get("Theme") == "legacy"
    assert sorted(p.name for p in data_root.iterdir()) == ["NewVendor", "OldVendor"]
    assert legacy.is_file()


def test_per_call_directory_failure_is_a_noop(make_provider, tmp_path):
    provider = make_provider()
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    provider.set("Theme", "dark")

    asyncio.run(provider.export_async(blocker / "sub" / "Settings.xml"))

    assert blocker.read_text(encoding="utf-8") == ""


def test_json_format(make_provider, sample_settings):
    from deskprefs_core import JsonSerializer

    provider = make_provider(filename="settings.json", serializer=JsonSerializer())
    provider.replace(sample_settings)
    asyncio.run(provider.save_async())

    fresh = make_provider(filename="settings.json", serializer=JsonSerializer())
    asyncio.run(fresh.load_async())
    assert fresh.snapshot() == sample_settings
    assert fresh.supported_formats == "JSON (*.json)|*.json"


def test_throttle_default():
    assert LocalSettingsProvider.file_system_handler_throttle == timedelta(milliseconds=1500)
