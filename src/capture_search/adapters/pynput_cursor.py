from __future__ import annotations

from pynput import mouse

from capture_search.ports.cursor_port import CursorPort


class PynputCursor(CursorPort):
    def __init__(self) -> None:
        self._controller = mouse.Controller()

    def position(self) -> tuple[int, int]:
        x, y = self._controller.position
        return int(x), int(y)
