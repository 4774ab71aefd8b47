from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor
from typing import Any

from capture_search.adapters.browser_search_adapter import BrowserSearchAdapter
from capture_search.adapters.imgbb_image_hosting import ImgbbImageHosting
from capture_search.adapters.json_settings_store import JsonSettingsStore
from capture_search.adapters.mss_screen_capture import MssScreenCapture
from capture_search.adapters.ocr_tesseract_adapter import TesseractOCRAdapter
from capture_search.adapters.pyperclip_clipboard import PyperclipClipboard
from capture_search.services.input_router import InputRouter
from capture_search.services.settings_service import SettingsService
from capture_search.services.workflow_orchestrator import CaptureOrchestrator
from capture_search.settings import SETTINGS_PATH


def build_services(
    settings_path: str | None = None,
    executor: Executor | None = None,
    open_browser: bool = True,
) -> dict[str, Any]:
    settings_service = SettingsService(JsonSettingsStore(settings_path or SETTINGS_PATH))
    capture = MssScreenCapture()
    ocr = TesseractOCRAdapter()
    image_host = ImgbbImageHosting()
    search = BrowserSearchAdapter(settings_service.snapshot, open_browser=open_browser)
    clipboard = PyperclipClipboard()
    orchestrator = CaptureOrchestrator(
        capture=capture,
        ocr=ocr,
        image_host=image_host,
        search=search,
        clipboard=clipboard,
        executor=executor,
    )
    return {
        "settings_service": settings_service,
        "orchestrator": orchestrator,
        "capture": capture,
        "ocr": ocr,
        "image_host": image_host,
        "search": search,
        "clipboard": clipboard,
    }


def build_input_router(
    services: dict[str, Any], on_quit: Callable[[], None] | None = None
) -> InputRouter:
    # pynput needs a display server at import time, so only interactive commands load it.
    from capture_search.adapters.pynput_cursor import PynputCursor
    from capture_search.adapters.pynput_hotkey_listener import PynputHotkeyListener

    settings_service: SettingsService = services["settings_service"]
    listener = PynputHotkeyListener(settings_service.snapshot().capture_hotkey)
    router = InputRouter(services["orchestrator"], listener, on_quit=on_quit)
    settings_service.subscribe(router.on_settings_changed)
    services["trigger_port"] = listener
    services["cursor"] = PynputCursor()
    services["input_router"] = router
    return router
