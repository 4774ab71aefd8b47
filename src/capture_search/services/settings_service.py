from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable

from capture_search.domain.errors import ConfigError
from capture_search.domain.user_settings import UserSettings, settings_keys
from capture_search.ports.settings_store_port import SettingsStorePort

logger = logging.getLogger(__name__)

SettingsListener = Callable[[UserSettings, UserSettings], None]


class SettingsService:
    """Process-wide user settings.

    Reads return the current immutable snapshot without locking. Updates are
    serialized, validated, persisted, and only then swapped in as a whole.
    """

    def __init__(self, store: SettingsStorePort) -> None:
        self._store = store
        self._current = store.load().validated()
        self._write_lock = threading.Lock()
        self._listeners: list[SettingsListener] = []

    def snapshot(self) -> UserSettings:
        return self._current

    def subscribe(self, listener: SettingsListener) -> None:
        self._listeners.append(listener)

    def update(self, **changes: object) -> UserSettings:
        unknown = sorted(set(changes) - set(settings_keys()))
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(unknown)}")
        with self._write_lock:
            previous = self._current
            candidate = dataclasses.replace(previous, **changes).validated()
            if candidate == previous:
                return previous
            self._store.save(candidate)
            self._current = candidate
        logger.info("Settings updated: %s", ", ".join(sorted(changes)))
        for listener in list(self._listeners):
            try:
                listener(previous, candidate)
            except Exception:
                logger.exception("Settings listener %r failed", listener)
        return candidate
