from .errors import (
    CaptureError,
    CaptureSearchError,
    ConfigError,
    FailureStep,
    OcrError,
    OutOfBounds,
    SearchError,
    SearchFailure,
    UploadError,
    ValidationError,
    WorkflowError,
)
from .models import ActionKind, CaptureBuffer, OcrResult, OcrWord, PixelBuffer, ScreenRegion, SearchOutcome
from .user_settings import ThemeMode, UserSettings

__all__ = [
    "ActionKind",
    "CaptureBuffer",
    "CaptureError",
    "CaptureSearchError",
    "ConfigError",
    "FailureStep",
    "OcrError",
    "OcrResult",
    "OcrWord",
    "OutOfBounds",
    "PixelBuffer",
    "ScreenRegion",
    "SearchError",
    "SearchFailure",
    "SearchOutcome",
    "ThemeMode",
    "UploadError",
    "UserSettings",
    "ValidationError",
    "WorkflowError",
]
