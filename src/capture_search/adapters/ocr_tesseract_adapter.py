from __future__ import annotations

import logging

import pytesseract
from PIL import Image, ImageOps

from capture_search.adapters.image_codec import to_pil_image
from capture_search.domain.errors import OcrError
from capture_search.domain.models import OcrResult, OcrWord, PixelBuffer, ScreenRegion
from capture_search.ports.ocr_port import OCRPort
from capture_search.settings import OCR_LANG, OCR_MIN_CONFIDENCE

logger = logging.getLogger(__name__)

_UPSCALE_BELOW = 600


class TesseractOCRAdapter(OCRPort):
    def __init__(
        self, language: str | None = None, min_confidence: float | None = None
    ) -> None:
        self._language = language or OCR_LANG
        self._min_confidence = OCR_MIN_CONFIDENCE if min_confidence is None else min_confidence

    def recognize(self, image: PixelBuffer) -> OcrResult:
        processed, scale = self._preprocess_image(to_pil_image(image))
        try:
            data = pytesseract.image_to_data(
                processed,
                lang=self._language,
                config="--oem 1 --psm 6",
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrError(
                "Tesseract OCR engine not found. Install tesseract-ocr and ensure it is on PATH."
            ) from exc
        except (pytesseract.TesseractError, RuntimeError) as exc:
            raise OcrError(f"Failed to run OCR on the selected region: {exc}") from exc
        words = self._collect_words(data, scale, image)
        logger.debug("Recognized %d words in %sx%s region", len(words), image.width, image.height)
        return OcrResult(words=tuple(words))

    def _collect_words(self, data: dict, scale: int, image: PixelBuffer) -> list[OcrWord]:
        words: list[OcrWord] = []
        line_ids: dict[tuple[int, int, int], int] = {}
        for index, raw_text in enumerate(data.get("text", [])):
            text = (raw_text or "").strip()
            if not text:
                continue
            confidence = self._confidence(data["conf"][index])
            if confidence is None or confidence < self._min_confidence:
                continue
            box = self._box(data, index, scale, image)
            if box is None:
                continue
            line_key = (
                int(data["block_num"][index]),
                int(data["par_num"][index]),
                int(data["line_num"][index]),
            )
            line = line_ids.setdefault(line_key, len(line_ids))
            words.append(OcrWord(text=text, confidence=confidence, box=box, line=line))
        return words

    @staticmethod
    def _confidence(value: object) -> float | None:
        if value in (-1, "-1", None, ""):
            return None
        try:
            confidence = float(value) / 100.0
        except (TypeError, ValueError):
            return None
        if confidence < 0.0:
            return None
        return min(confidence, 1.0)

    @staticmethod
    def _box(data: dict, index: int, scale: int, image: PixelBuffer) -> ScreenRegion | None:
        left = max(int(data["left"][index]) // scale, 0)
        top = max(int(data["top"][index]) // scale, 0)
        right = min((int(data["left"][index]) + int(data["width"][index])) // scale, image.width)
        bottom = min((int(data["top"][index]) + int(data["height"][index])) // scale, image.height)
        if right <= left or bottom <= top:
            return None
        return ScreenRegion(origin_x=left, origin_y=top, width=right - left, height=bottom - top)

    def _preprocess_image(self, image: Image.Image) -> tuple[Image.Image, int]:
        img = image.convert("L")
        img = ImageOps.autocontrast(img)
        scale = 1
        if max(img.size) < _UPSCALE_BELOW:
            scale = 2
            img = img.resize(
                (img.size[0] * scale, img.size[1] * scale),
                resample=Image.BICUBIC,
            )
        return img, scale
