import pytest

from capture_search.domain.errors import OutOfBounds, ValidationError
from capture_search.domain.models import (
    CaptureBuffer,
    OcrResult,
    OcrWord,
    PixelBuffer,
    ScreenRegion,
    SearchOutcome,
    validate_region,
)
from capture_search.domain.errors import SearchFailure


def _patterned_buffer(width: int, height: int) -> PixelBuffer:
    data = bytearray()
    for y in range(height):
        for x in range(width):
            data.extend((x % 256, y % 256, (x + y) % 256, 255))
    return PixelBuffer(width=width, height=height, data=bytes(data))


def test_pixel_buffer_rejects_mismatched_data_length() -> None:
    with pytest.raises(ValueError):
        PixelBuffer(width=2, height=2, data=b"\x00" * 15)


def test_crop_returns_region_dimensions_and_pixels() -> None:
    frame = _patterned_buffer(100, 100)

    cropped = frame.crop(ScreenRegion(10, 20, 30, 40))

    assert cropped.size == (30, 40)
    assert len(cropped.data) == 30 * 40 * 4
    assert cropped.data[:4] == bytes((10, 20, 30, 255))
    last = cropped.data[-4:]
    assert last == bytes((39, 59, 98, 255))


def test_crop_full_frame_keeps_dimensions() -> None:
    frame = _patterned_buffer(50, 50)

    cropped = frame.crop(ScreenRegion(0, 0, 50, 50))

    assert cropped == frame


@pytest.mark.parametrize(
    "region",
    [
        ScreenRegion(95, 95, 20, 20),
        ScreenRegion(0, 0, 101, 10),
        ScreenRegion(0, 100, 1, 1),
        ScreenRegion(10, 10, 0, 5),
    ],
)
def test_crop_outside_frame_raises_out_of_bounds(region: ScreenRegion) -> None:
    frame = _patterned_buffer(100, 100)

    with pytest.raises(OutOfBounds):
        frame.crop(region)


def test_screen_region_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        ScreenRegion(-1, 0, 10, 10)


def test_from_corners_normalizes_drag_direction() -> None:
    assert ScreenRegion.from_corners(60, 40, 10, 10) == ScreenRegion(10, 10, 50, 30)
    assert ScreenRegion.from_corners(-5, 5, 20, 25) == ScreenRegion(0, 5, 20, 20)


def test_parse_region() -> None:
    assert ScreenRegion.parse("10, 10,50,30") == ScreenRegion(10, 10, 50, 30)
    with pytest.raises(ValueError):
        ScreenRegion.parse("10,10,50")


def test_validate_region_rejects_empty_and_oversized() -> None:
    frame = PixelBuffer.blank(200, 200)

    with pytest.raises(ValidationError):
        validate_region(ScreenRegion(10, 10, 0, 30), frame)
    with pytest.raises(ValidationError):
        validate_region(ScreenRegion(190, 10, 20, 30), frame)
    assert validate_region(ScreenRegion(10, 10, 50, 30), frame) == ScreenRegion(10, 10, 50, 30)


def test_capture_buffer_crops_pending_selection() -> None:
    capture = CaptureBuffer(frame=PixelBuffer.blank(20, 20)).with_selection(ScreenRegion(2, 3, 4, 5))

    assert capture.cropped_view().size == (4, 5)


def test_capture_buffer_without_selection_raises() -> None:
    with pytest.raises(OutOfBounds):
        CaptureBuffer(frame=PixelBuffer.blank(20, 20)).cropped_view()


def test_ocr_result_full_text_breaks_lines() -> None:
    box = ScreenRegion(0, 0, 5, 5)
    result = OcrResult(
        words=(
            OcrWord("Hello", 0.9, box, line=0),
            OcrWord("world", 0.8, box, line=0),
            OcrWord("again", 0.7, box, line=1),
        )
    )

    assert result.full_text == "Hello world\nagain"
    assert OcrResult().is_empty
    assert OcrResult().full_text == ""


def test_ocr_word_rejects_confidence_outside_unit_range() -> None:
    with pytest.raises(ValueError):
        OcrWord("x", 1.5, ScreenRegion(0, 0, 1, 1))


def test_search_outcome_requires_exactly_one_side() -> None:
    assert SearchOutcome.launched("https://x").succeeded
    assert not SearchOutcome.failed(SearchFailure.SEARCH_FAILED).succeeded
    with pytest.raises(ValueError):
        SearchOutcome()
