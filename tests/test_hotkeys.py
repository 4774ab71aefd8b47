import pytest

from capture_search.domain.errors import ConfigError
from capture_search.domain.hotkeys import parse_hotkey


def test_parse_default_hotkey_to_pynput_form() -> None:
    hotkey = parse_hotkey("Alt+Shift+S")

    assert hotkey.to_pynput() == "<alt>+<shift>+s"
    assert str(hotkey) == "Alt+Shift+S"


def test_parse_orders_modifiers_and_accepts_aliases() -> None:
    hotkey = parse_hotkey("shift+control+cmd+1")

    assert hotkey.modifiers == ("ctrl", "shift", "cmd")
    assert hotkey.to_pynput() == "<ctrl>+<shift>+<cmd>+1"


def test_function_key_without_modifier_is_allowed() -> None:
    assert parse_hotkey("F9").to_pynput() == "<f9>"


@pytest.mark.parametrize(
    "value",
    ["", "S", "Alt+", "Alt+Shift", "Hyper+S", "Alt+Alt+S", "Alt+??", "Ctrl+F25"],
)
def test_invalid_hotkeys_raise_config_error(value: str) -> None:
    with pytest.raises(ConfigError):
        parse_hotkey(value)
