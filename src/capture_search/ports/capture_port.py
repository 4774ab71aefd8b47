from __future__ import annotations

from typing import Protocol, runtime_checkable

from capture_search.domain.models import PixelBuffer


@runtime_checkable
class CapturePort(Protocol):
    def capture_full_frame(self) -> PixelBuffer:
        """Capture the whole screen. Raises CaptureError on failure."""
