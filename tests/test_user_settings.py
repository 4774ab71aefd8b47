import pytest

from capture_search.domain.errors import ConfigError
from capture_search.domain.user_settings import (
    ThemeMode,
    UserSettings,
    build_search_url,
    validate_url_template,
)


def test_build_search_url_substitutes_verbatim() -> None:
    url = build_search_url(
        "https://lens.google.com/uploadbyurl?url={}", "https://img.example/abc.png"
    )

    assert url == "https://lens.google.com/uploadbyurl?url=https://img.example/abc.png"


@pytest.mark.parametrize(
    "template",
    ["https://lens.google.com/uploadbyurl", "https://x/{}?a={}", "https://x/{url}"],
)
def test_templates_without_exactly_one_placeholder_are_rejected(template: str) -> None:
    with pytest.raises(ConfigError):
        validate_url_template(template)


def test_from_dict_fills_defaults_and_ignores_unknown_keys() -> None:
    settings = UserSettings.from_dict({"theme_mode": "light", "window_width": 400})

    assert settings.theme_mode is ThemeMode.LIGHT
    assert settings.capture_hotkey == "Alt+Shift+S"
    assert settings.image_search_url_template == "https://lens.google.com/uploadbyurl?url={}"


def test_from_dict_rejects_bad_template_at_load() -> None:
    with pytest.raises(ConfigError):
        UserSettings.from_dict({"image_search_url_template": "https://x/?a={}&b={}"})


def test_from_dict_rejects_bad_theme_and_hotkey() -> None:
    with pytest.raises(ConfigError):
        UserSettings.from_dict({"theme_mode": "Sepia"})
    with pytest.raises(ConfigError):
        UserSettings.from_dict({"capture_hotkey": "Alt+"})


def test_from_dict_rejects_non_object() -> None:
    with pytest.raises(ConfigError):
        UserSettings.from_dict(["not", "a", "dict"])


def test_validated_normalizes_strings() -> None:
    settings = UserSettings(
        capture_hotkey="ctrl+shift+x",
        theme_mode="dark",
        launch_at_login="yes",
    ).validated()

    assert settings.capture_hotkey == "Ctrl+Shift+X"
    assert settings.theme_mode is ThemeMode.DARK
    assert settings.launch_at_login is True


def test_to_dict_round_trips_theme_value() -> None:
    payload = UserSettings().to_dict()

    assert payload["theme_mode"] == "Dark"
    assert UserSettings.from_dict(payload) == UserSettings()
