import json
import threading
from unittest.mock import Mock

import pytest

from capture_search.adapters.json_settings_store import JsonSettingsStore
from capture_search.domain.errors import ConfigError
from capture_search.domain.user_settings import ThemeMode, UserSettings
from capture_search.services.settings_service import SettingsService


def test_missing_file_loads_defaults_without_writing(tmp_path) -> None:
    path = tmp_path / "settings.json"
    store = JsonSettingsStore(path)

    assert store.load() == UserSettings()
    assert not path.exists()


def test_invalid_json_raises_config_error(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        JsonSettingsStore(path).load()


def test_non_utf8_file_raises_config_error(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_bytes(b'{"theme_mode": "\xff\xfe"}')

    with pytest.raises(ConfigError):
        JsonSettingsStore(path).load()


def test_template_without_placeholder_is_rejected(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"image_search_url_template": "https://example.com/search"}),
        encoding="utf-8",
    )

    with pytest.raises(ConfigError):
        JsonSettingsStore(path).load()


def test_unknown_keys_in_file_are_ignored(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"theme_mode": "light", "legacy": 1}), encoding="utf-8")

    assert JsonSettingsStore(path).load().theme_mode is ThemeMode.LIGHT


def test_save_replaces_file_and_leaves_no_temp_files(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    store = JsonSettingsStore(path)

    store.save(UserSettings(theme_mode=ThemeMode.LIGHT))

    assert json.loads(path.read_text(encoding="utf-8"))["theme_mode"] == "Light"
    assert [item.name for item in path.parent.iterdir()] == ["settings.json"]
    assert store.load().theme_mode is ThemeMode.LIGHT


def test_update_persists_and_swaps_snapshot(tmp_path) -> None:
    path = tmp_path / "settings.json"
    service = SettingsService(JsonSettingsStore(path))
    before = service.snapshot()

    after = service.update(capture_hotkey="ctrl+alt+k")

    assert after.capture_hotkey == "Ctrl+Alt+K"
    assert service.snapshot() is after
    assert before.capture_hotkey == "Alt+Shift+S"
    assert JsonSettingsStore(path).load() == after


def test_update_rejects_unknown_key() -> None:
    store = Mock()
    store.load.return_value = UserSettings()
    service = SettingsService(store)

    with pytest.raises(ConfigError):
        service.update(font_size=12)

    store.save.assert_not_called()


def test_invalid_update_keeps_previous_snapshot() -> None:
    store = Mock()
    store.load.return_value = UserSettings()
    service = SettingsService(store)

    with pytest.raises(ConfigError):
        service.update(image_search_url_template="https://example.com/{}/{}")

    assert service.snapshot() == UserSettings()
    store.save.assert_not_called()


def test_unchanged_update_does_not_save_or_notify() -> None:
    store = Mock()
    store.load.return_value = UserSettings()
    service = SettingsService(store)
    listener = Mock()
    service.subscribe(listener)

    service.update(theme_mode="dark")

    store.save.assert_not_called()
    listener.assert_not_called()


def test_listeners_receive_previous_and_current() -> None:
    store = Mock()
    store.load.return_value = UserSettings()
    service = SettingsService(store)
    failing = Mock(side_effect=RuntimeError("boom"))
    listener = Mock()
    service.subscribe(failing)
    service.subscribe(listener)

    current = service.update(theme_mode="light")

    listener.assert_called_once_with(UserSettings(), current)
    store.save.assert_called_once_with(current)


def test_concurrent_updates_keep_every_change(tmp_path) -> None:
    service = SettingsService(JsonSettingsStore(tmp_path / "settings.json"))
    barrier = threading.Barrier(3)

    def update(**changes) -> None:
        barrier.wait()
        service.update(**changes)

    threads = [
        threading.Thread(target=update, kwargs={"theme_mode": "light"}),
        threading.Thread(target=update, kwargs={"launch_at_login": True}),
        threading.Thread(target=update, kwargs={"onboarding_complete": True}),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    final = service.snapshot()
    assert final.theme_mode is ThemeMode.LIGHT
    assert final.launch_at_login is True
    assert final.onboarding_complete is True
    assert JsonSettingsStore(tmp_path / "settings.json").load() == final
