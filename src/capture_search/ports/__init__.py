from .capture_port import CapturePort
from .clipboard_port import ClipboardPort
from .cursor_port import CursorPort
from .image_hosting_port import ImageHostingPort
from .ocr_port import OCRPort
from .search_port import SearchPort
from .settings_store_port import SettingsStorePort
from .tray_port import TrayEvent, TrayPort
from .trigger_port import TriggerPort

__all__ = [
    "CapturePort",
    "ClipboardPort",
    "CursorPort",
    "ImageHostingPort",
    "OCRPort",
    "SearchPort",
    "SettingsStorePort",
    "TrayEvent",
    "TrayPort",
    "TriggerPort",
]
