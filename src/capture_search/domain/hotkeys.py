from __future__ import annotations

import re
from dataclasses import dataclass

from capture_search.domain.errors import ConfigError

_MODIFIER_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "alt",
    "option": "alt",
    "shift": "shift",
    "cmd": "cmd",
    "command": "cmd",
    "super": "cmd",
    "win": "cmd",
    "meta": "cmd",
}
_MODIFIER_ORDER = ("ctrl", "alt", "shift", "cmd")
_NAMED_KEYS = {
    "space",
    "tab",
    "enter",
    "esc",
    "home",
    "end",
    "insert",
    "delete",
    "page_up",
    "page_down",
    "print_screen",
}
_FUNCTION_KEY = re.compile(r"^f([1-9]|1[0-9]|20)$")


@dataclass(frozen=True)
class Hotkey:
    modifiers: tuple[str, ...]
    key: str

    def to_pynput(self) -> str:
        """Render in the ``<alt>+<shift>+s`` form accepted by pynput."""

        parts = [f"<{modifier}>" for modifier in self.modifiers]
        if len(self.key) == 1:
            parts.append(self.key)
        else:
            parts.append(f"<{self.key}>")
        return "+".join(parts)

    def __str__(self) -> str:
        parts = [modifier.capitalize() for modifier in self.modifiers]
        parts.append(self.key.upper() if len(self.key) == 1 else self.key.capitalize())
        return "+".join(parts)


def parse_hotkey(value: str) -> Hotkey:
    """Parse a key combo such as ``Alt+Shift+S`` or ``ctrl+f9``."""

    tokens = [token.strip().lower() for token in str(value).split("+")]
    if not tokens or any(not token for token in tokens):
        raise ConfigError(f"Invalid hotkey: {value!r}")
    *modifier_tokens, key = tokens
    modifiers: set[str] = set()
    for token in modifier_tokens:
        modifier = _MODIFIER_ALIASES.get(token)
        if modifier is None:
            raise ConfigError(f"Unknown modifier {token!r} in hotkey {value!r}")
        if modifier in modifiers:
            raise ConfigError(f"Duplicate modifier {token!r} in hotkey {value!r}")
        modifiers.add(modifier)
    if key in _MODIFIER_ALIASES:
        raise ConfigError(f"Hotkey {value!r} has no non-modifier key")
    is_function_key = bool(_FUNCTION_KEY.match(key))
    if not (len(key) == 1 and key.isalnum()) and key not in _NAMED_KEYS and not is_function_key:
        raise ConfigError(f"Unsupported key {key!r} in hotkey {value!r}")
    if not modifiers and not is_function_key:
        raise ConfigError(f"Hotkey {value!r} needs at least one modifier")
    ordered = tuple(modifier for modifier in _MODIFIER_ORDER if modifier in modifiers)
    return Hotkey(modifiers=ordered, key=key)
