from __future__ import annotations

import logging

import mss
from mss.exception import ScreenShotError
from PIL import Image

from capture_search.adapters.image_codec import from_pil_image
from capture_search.domain.errors import CaptureError
from capture_search.domain.models import PixelBuffer
from capture_search.ports.capture_port import CapturePort
from capture_search.settings import CAPTURE_MONITOR

logger = logging.getLogger(__name__)


class MssScreenCapture(CapturePort):
    """Grabs one mss monitor; index 0 is the union of all screens."""

    def __init__(self, monitor: int | None = None) -> None:
        self._monitor = CAPTURE_MONITOR if monitor is None else monitor
        self._origin = (0, 0)

    @property
    def origin(self) -> tuple[int, int]:
        """Screen position of the top-left pixel of the last captured frame."""

        return self._origin

    def capture_full_frame(self) -> PixelBuffer:
        try:
            with mss.mss() as sct:
                try:
                    monitor = sct.monitors[self._monitor]
                except IndexError as exc:
                    raise CaptureError(f"Monitor {self._monitor} is not available") from exc
                raw = sct.grab(monitor)
                origin = (int(monitor["left"]), int(monitor["top"]))
                image = Image.frombytes("RGB", raw.size, raw.rgb)
        except (ScreenShotError, OSError) as exc:
            raise CaptureError(f"Screen capture failed: {exc}") from exc
        self._origin = origin
        buffer = from_pil_image(image)
        logger.debug("Captured %sx%s frame from monitor %s", buffer.width, buffer.height, self._monitor)
        return buffer
