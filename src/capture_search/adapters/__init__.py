from .browser_search_adapter import BrowserSearchAdapter
from .imgbb_image_hosting import ImgbbImageHosting
from .json_settings_store import JsonSettingsStore
from .ocr_tesseract_adapter import TesseractOCRAdapter

__all__ = [
    "BrowserSearchAdapter",
    "ImgbbImageHosting",
    "JsonSettingsStore",
    "TesseractOCRAdapter",
]
