from __future__ import annotations

from typing import Protocol, runtime_checkable

from capture_search.domain.models import PixelBuffer


@runtime_checkable
class ImageHostingPort(Protocol):
    def upload(self, image: PixelBuffer) -> str:
        """Upload the image and return its public URL. Raises UploadError."""
