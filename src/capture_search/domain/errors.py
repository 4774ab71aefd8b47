from __future__ import annotations

from enum import Enum


class FailureStep(str, Enum):
    """Workflow step a session failed in, used to pick a user-facing message."""

    CAPTURE = "capture"
    CROP = "crop"
    OCR = "ocr"
    UPLOAD = "upload"
    SEARCH = "search"


class SearchFailure(str, Enum):
    UPLOAD_FAILED = "upload_failed"
    SEARCH_FAILED = "search_failed"
    NETWORK_UNAVAILABLE = "network_unavailable"


class CaptureSearchError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(CaptureSearchError):
    pass


class ValidationError(CaptureSearchError):
    """A selected region was rejected; the user may redraw it."""


class WorkflowError(CaptureSearchError):
    """An error that ends the current capture session."""

    step: FailureStep

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class CaptureError(WorkflowError):
    step = FailureStep.CAPTURE


class OutOfBounds(WorkflowError):
    step = FailureStep.CROP


class OcrError(WorkflowError):
    step = FailureStep.OCR


class UploadError(WorkflowError):
    step = FailureStep.UPLOAD

    def __init__(
        self,
        reason: SearchFailure = SearchFailure.UPLOAD_FAILED,
        message: str = "",
    ) -> None:
        super().__init__(reason, message)
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        return self.message or self.reason.value


class SearchError(WorkflowError):
    step = FailureStep.SEARCH

    def __init__(
        self,
        reason: SearchFailure = SearchFailure.SEARCH_FAILED,
        message: str = "",
    ) -> None:
        super().__init__(reason, message)
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        return self.message or self.reason.value


_FAILURE_MESSAGES = {
    FailureStep.CAPTURE: "Could not capture the screen.",
    FailureStep.CROP: "The selected region could not be cut from the screenshot.",
    FailureStep.OCR: "Text recognition failed.",
    FailureStep.UPLOAD: "Uploading the image failed.",
    FailureStep.SEARCH: "The image search could not be opened.",
}


def describe_failure(error: WorkflowError) -> str:
    base = _FAILURE_MESSAGES[error.step]
    reason = getattr(error, "reason", None)
    if reason is SearchFailure.NETWORK_UNAVAILABLE:
        return f"{base} Check your network connection."
    detail = str(error)
    if detail and detail != getattr(reason, "value", None):
        return f"{base} {detail}"
    return base
