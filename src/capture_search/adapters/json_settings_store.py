from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from capture_search.domain.errors import ConfigError
from capture_search.domain.user_settings import UserSettings
from capture_search.ports.settings_store_port import SettingsStorePort

logger = logging.getLogger(__name__)


class JsonSettingsStore(SettingsStorePort):
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> UserSettings:
        if not self._path.exists():
            logger.info("No settings file at %s, using defaults", self._path)
            return UserSettings()
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Settings file {self._path} is not valid UTF-8 JSON: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Could not read settings file {self._path}: {exc}") from exc
        settings = UserSettings.from_dict(payload)
        logger.info("Loaded settings from %s", self._path)
        logger.debug("Capture hotkey: %s", settings.capture_hotkey)
        return settings

    def save(self, settings: UserSettings) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        contents = json.dumps(settings.to_dict(), indent=2, ensure_ascii=False)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(contents)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Saved settings to %s", self._path)
