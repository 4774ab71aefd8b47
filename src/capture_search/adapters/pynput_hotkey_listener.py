from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from pynput import keyboard

from capture_search.domain.hotkeys import Hotkey, parse_hotkey
from capture_search.ports.trigger_port import TriggerPort

logger = logging.getLogger(__name__)

CANCEL_COMBO = "<esc>"


class PynputHotkeyListener(TriggerPort):
    def __init__(self, hotkey: str) -> None:
        self._hotkey: Hotkey = parse_hotkey(hotkey)
        self._listener: keyboard.GlobalHotKeys | None = None
        self._on_trigger: Callable[[], None] | None = None
        self._on_cancel: Callable[[], None] | None = None
        self._lock = threading.Lock()

    @property
    def hotkey(self) -> Hotkey:
        return self._hotkey

    def start(self, on_trigger: Callable[[], None], on_cancel: Callable[[], None]) -> None:
        with self._lock:
            self._on_trigger = on_trigger
            self._on_cancel = on_cancel
            self._restart()

    def rebind(self, hotkey: str) -> None:
        parsed = parse_hotkey(hotkey)
        with self._lock:
            self._hotkey = parsed
            if self._listener is not None:
                self._restart()

    def stop(self) -> None:
        with self._lock:
            if self._listener is not None:
                self._listener.stop()
                self._listener = None
                logger.debug("Hotkey listener stopped")

    def _restart(self) -> None:
        if self._listener is not None:
            self._listener.stop()
        combos = {
            self._hotkey.to_pynput(): self._on_trigger,
            CANCEL_COMBO: self._on_cancel,
        }
        self._listener = keyboard.GlobalHotKeys(combos)
        self._listener.start()
        logger.info("Listening for %s (capture) and Escape (cancel)", self._hotkey)
