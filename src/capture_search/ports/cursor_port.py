from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CursorPort(Protocol):
    def position(self) -> tuple[int, int]:
        """Return the pointer position in screen coordinates."""
