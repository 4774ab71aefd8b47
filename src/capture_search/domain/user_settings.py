from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum

from capture_search.domain.errors import ConfigError
from capture_search.domain.hotkeys import parse_hotkey

URL_PLACEHOLDER = "{}"
DEFAULT_CAPTURE_HOTKEY = "Alt+Shift+S"
DEFAULT_IMAGE_SEARCH_URL_TEMPLATE = "https://lens.google.com/uploadbyurl?url={}"


class ThemeMode(str, Enum):
    LIGHT = "Light"
    DARK = "Dark"


def parse_theme_mode(value: object) -> ThemeMode:
    if isinstance(value, ThemeMode):
        return value
    normalized = str(value).strip().lower()
    for mode in ThemeMode:
        if mode.value.lower() == normalized:
            return mode
    raise ConfigError(f"Unsupported theme mode: {value!r}")


def validate_url_template(template: str) -> str:
    if not isinstance(template, str):
        raise ConfigError("image_search_url_template must be a string")
    count = template.count(URL_PLACEHOLDER)
    if count != 1:
        raise ConfigError(
            f"image_search_url_template must contain exactly one {URL_PLACEHOLDER} "
            f"placeholder, found {count}: {template!r}"
        )
    return template


def build_search_url(template: str, image_url: str) -> str:
    """Substitute the hosted image URL into the template verbatim."""

    validate_url_template(template)
    prefix, suffix = template.split(URL_PLACEHOLDER)
    return f"{prefix}{image_url}{suffix}"


def _parse_bool(name: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "1", "yes", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "0", "no", "off"}:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class UserSettings:
    capture_hotkey: str = DEFAULT_CAPTURE_HOTKEY
    theme_mode: ThemeMode = ThemeMode.DARK
    image_search_url_template: str = DEFAULT_IMAGE_SEARCH_URL_TEMPLATE
    # Persisted for a presentation layer; nothing in this package acts on them.
    run_in_system_tray: bool = True
    onboarding_complete: bool = False
    launch_at_login: bool = False

    def validated(self) -> UserSettings:
        """Return a normalized copy, raising ConfigError on any invalid field."""

        return UserSettings(
            capture_hotkey=str(parse_hotkey(self.capture_hotkey)),
            theme_mode=parse_theme_mode(self.theme_mode),
            image_search_url_template=validate_url_template(self.image_search_url_template),
            run_in_system_tray=_parse_bool("run_in_system_tray", self.run_in_system_tray),
            onboarding_complete=_parse_bool("onboarding_complete", self.onboarding_complete),
            launch_at_login=_parse_bool("launch_at_login", self.launch_at_login),
        )

    def search_url_for(self, image_url: str) -> str:
        return build_search_url(self.image_search_url_template, image_url)

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["theme_mode"] = self.theme_mode.value
        return payload

    @classmethod
    def from_dict(cls, payload: dict) -> UserSettings:
        if not isinstance(payload, dict):
            raise ConfigError("Settings must be a JSON object")
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in payload.items() if key in known}
        return cls(**values).validated()


def settings_keys() -> list[str]:
    return [item.name for item in fields(UserSettings)]
