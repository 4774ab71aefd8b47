from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from capture_search.domain.errors import OutOfBounds, SearchFailure, ValidationError

BYTES_PER_PIXEL = 4


class ActionKind(str, Enum):
    OCR = "ocr"
    SEARCH = "search"


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA pixels."""

    width: int
    height: int
    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Pixel buffer must not be empty: {self.width}x{self.height}")
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel buffer of {self.width}x{self.height} needs {expected} bytes, "
                f"got {len(self.data)}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> PixelBuffer:
        return cls(width=width, height=height, data=bytes(width * height * BYTES_PER_PIXEL))

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def contains(self, region: ScreenRegion) -> bool:
        return (
            region.origin_x + region.width <= self.width
            and region.origin_y + region.height <= self.height
        )

    def crop(self, region: ScreenRegion) -> PixelBuffer:
        if region.is_empty or not self.contains(region):
            raise OutOfBounds(
                f"Region {region} is outside the {self.width}x{self.height} frame"
            )
        stride = self.width * BYTES_PER_PIXEL
        row_len = region.width * BYTES_PER_PIXEL
        start_col = region.origin_x * BYTES_PER_PIXEL
        rows = []
        for row in range(region.origin_y, region.origin_y + region.height):
            offset = row * stride + start_col
            rows.append(self.data[offset : offset + row_len])
        return PixelBuffer(width=region.width, height=region.height, data=b"".join(rows))


@dataclass(frozen=True)
class ScreenRegion:
    origin_x: int
    origin_y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("origin_x", "origin_y", "width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @classmethod
    def from_corners(cls, x1: int, y1: int, x2: int, y2: int) -> ScreenRegion:
        """Build a region from two drag corners given in any order."""

        # Drags may leave the overlay to the top/left of the screen.
        left, right = sorted((max(x1, 0), max(x2, 0)))
        top, bottom = sorted((max(y1, 0), max(y2, 0)))
        return cls(origin_x=left, origin_y=top, width=right - left, height=bottom - top)

    @classmethod
    def parse(cls, value: str) -> ScreenRegion:
        """Parse ``"x,y,width,height"``."""

        parts = [part.strip() for part in value.split(",")]
        if len(parts) != 4:
            raise ValueError(f"Expected x,y,width,height, got {value!r}")
        try:
            x, y, width, height = (int(part) for part in parts)
        except ValueError as exc:
            raise ValueError(f"Region values must be integers: {value!r}") from exc
        return cls(origin_x=x, origin_y=y, width=width, height=height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def __str__(self) -> str:
        return f"{self.width}x{self.height}+{self.origin_x}+{self.origin_y}"


def validate_region(region: ScreenRegion, frame: PixelBuffer) -> ScreenRegion:
    if region.is_empty:
        raise ValidationError(f"Selection {region} has no area.")
    if not frame.contains(region):
        raise ValidationError(
            f"Selection {region} extends past the {frame.width}x{frame.height} screenshot."
        )
    return region


@dataclass(frozen=True)
class CaptureBuffer:
    """A captured frame plus the selection currently drawn on it."""

    frame: PixelBuffer
    selection: ScreenRegion | None = None

    def with_selection(self, region: ScreenRegion | None) -> CaptureBuffer:
        return CaptureBuffer(frame=self.frame, selection=region)

    def cropped_view(self, region: ScreenRegion | None = None) -> PixelBuffer:
        target = region or self.selection
        if target is None:
            raise OutOfBounds("No region selected")
        return self.frame.crop(target)


@dataclass(frozen=True)
class OcrWord:
    text: str
    confidence: float
    box: ScreenRegion
    line: int = 0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within 0..1, got {self.confidence}")


@dataclass(frozen=True)
class OcrResult:
    words: tuple[OcrWord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.words

    @property
    def full_text(self) -> str:
        lines: list[list[str]] = []
        current_line: int | None = None
        for word in self.words:
            if word.line != current_line:
                lines.append([])
                current_line = word.line
            lines[-1].append(word.text)
        return "\n".join(" ".join(line) for line in lines)


@dataclass(frozen=True)
class SearchOutcome:
    target: str | None = None
    failure: SearchFailure | None = None

    def __post_init__(self) -> None:
        if (self.target is None) == (self.failure is None):
            raise ValueError("SearchOutcome needs exactly one of target or failure")

    @classmethod
    def launched(cls, target: str) -> SearchOutcome:
        return cls(target=target)

    @classmethod
    def failed(cls, failure: SearchFailure) -> SearchOutcome:
        return cls(failure=failure)

    @property
    def succeeded(self) -> bool:
        return self.target is not None
