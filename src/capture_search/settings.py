from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)

SETTINGS_PATH = os.getenv(
    "CAPTURE_SEARCH_SETTINGS_PATH",
    str(Path.home() / ".config" / "capture-search" / "settings.json"),
)
OCR_LANG = os.getenv("OCR_LANG", "eng")
OCR_MIN_CONFIDENCE = float(os.getenv("OCR_MIN_CONFIDENCE", "0.0"))
IMGBB_API_URL = os.getenv("IMGBB_API_URL", "https://api.imgbb.com/1/upload")
IMGBB_API_KEY = os.getenv("IMGBB_API_KEY", "")
IMGBB_EXPIRATION_SECONDS = int(os.getenv("IMGBB_EXPIRATION_SECONDS", "900"))
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "20"))
CAPTURE_MONITOR = int(os.getenv("CAPTURE_MONITOR", "0"))
KEYRING_SERVICE = os.getenv("KEYRING_SERVICE", "capture-search")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
