from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Protocol, runtime_checkable


class TrayEvent(str, Enum):
    CAPTURE = "capture"
    CANCEL = "cancel"
    QUIT = "quit"


@runtime_checkable
class TrayPort(Protocol):
    def start(self, on_event: Callable[[TrayEvent], None]) -> None:
        """Show the tray icon and report menu selections."""

    def stop(self) -> None:
        """Remove the tray icon."""
