import io

from PIL import Image

from capture_search.adapters.image_codec import encode_png, from_pil_image, to_pil_image
from capture_search.domain.models import PixelBuffer


def test_rgb_image_becomes_opaque_rgba_buffer() -> None:
    image = Image.new("RGB", (3, 2), (10, 20, 30))

    buffer = from_pil_image(image)

    assert buffer.size == (3, 2)
    assert buffer.data[:4] == bytes([10, 20, 30, 255])
    assert to_pil_image(buffer).getpixel((2, 1)) == (10, 20, 30, 255)


def test_encode_png_keeps_dimensions() -> None:
    png = encode_png(PixelBuffer.blank(5, 4))

    assert png.startswith(b"\x89PNG")
    assert Image.open(io.BytesIO(png)).size == (5, 4)
