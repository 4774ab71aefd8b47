from __future__ import annotations

from typing import Protocol

from capture_search.domain.user_settings import UserSettings


class SettingsStorePort(Protocol):
    def load(self) -> UserSettings:
        """Return persisted settings, or defaults when none exist."""

    def save(self, settings: UserSettings) -> None:
        """Persist settings, replacing the previous file atomically."""
