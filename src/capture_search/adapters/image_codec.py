from __future__ import annotations

import io

from PIL import Image

from capture_search.domain.models import PixelBuffer


def to_pil_image(buffer: PixelBuffer) -> Image.Image:
    return Image.frombytes("RGBA", buffer.size, buffer.data)


def from_pil_image(image: Image.Image) -> PixelBuffer:
    rgba = image.convert("RGBA")
    width, height = rgba.size
    return PixelBuffer(width=width, height=height, data=rgba.tobytes())


def encode_png(buffer: PixelBuffer) -> bytes:
    output = io.BytesIO()
    to_pil_image(buffer).save(output, format="PNG")
    return output.getvalue()
