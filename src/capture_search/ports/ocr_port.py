from __future__ import annotations

from typing import Protocol, runtime_checkable

from capture_search.domain.models import OcrResult, PixelBuffer


@runtime_checkable
class OCRPort(Protocol):
    def recognize(self, image: PixelBuffer) -> OcrResult:
        """Extract words from the image. Raises OcrError on failure."""
