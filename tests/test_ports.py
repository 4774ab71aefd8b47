from capture_search.domain.models import OcrResult, PixelBuffer, SearchOutcome
from capture_search.ports import (
    CapturePort,
    ClipboardPort,
    CursorPort,
    ImageHostingPort,
    OCRPort,
    SearchPort,
    TrayPort,
    TriggerPort,
)


class DummyCapture:
    def capture_full_frame(self) -> PixelBuffer:
        return PixelBuffer.blank(1, 1)


class DummyOcr:
    def recognize(self, image: PixelBuffer) -> OcrResult:
        return OcrResult(words=())


class DummyHost:
    def upload(self, image: PixelBuffer) -> str:
        return "https://example.com/a.png"


class DummySearch:
    def search(self, image_url: str, query: str | None = None) -> SearchOutcome:
        return SearchOutcome.launched(image_url)


class DummyInput:
    def copy_text(self, text: str) -> None:
        pass

    def position(self) -> tuple[int, int]:
        return 0, 0

    def start(self, *callbacks) -> None:
        pass

    def rebind(self, hotkey: str) -> None:
        pass

    def stop(self) -> None:
        pass


def test_workflow_ports_runtime_checkable() -> None:
    assert isinstance(DummyCapture(), CapturePort)
    assert isinstance(DummyOcr(), OCRPort)
    assert isinstance(DummyHost(), ImageHostingPort)
    assert isinstance(DummySearch(), SearchPort)
    assert not isinstance(DummyOcr(), SearchPort)


def test_input_ports_runtime_checkable() -> None:
    dummy = DummyInput()
    assert isinstance(dummy, ClipboardPort)
    assert isinstance(dummy, CursorPort)
    assert isinstance(dummy, TriggerPort)
    assert isinstance(dummy, TrayPort)
