from __future__ import annotations

import pyperclip

from capture_search.ports.clipboard_port import ClipboardPort


class PyperclipClipboard(ClipboardPort):
    def copy_text(self, text: str) -> None:
        pyperclip.copy(text)
