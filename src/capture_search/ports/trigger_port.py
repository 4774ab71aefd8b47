from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TriggerPort(Protocol):
    def start(self, on_trigger: Callable[[], None], on_cancel: Callable[[], None]) -> None:
        """Begin listening; callbacks fire on the listener's own thread."""

    def rebind(self, hotkey: str) -> None:
        """Replace the capture hotkey while listening."""

    def stop(self) -> None:
        """Stop listening and release OS hooks."""
