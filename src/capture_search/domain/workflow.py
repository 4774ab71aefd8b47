"""Capture workflow states, the commands that drive them, and the transition function.

``advance`` is pure: it never performs I/O. Side effects requested by a
transition are returned as ``Effect`` values and executed by the orchestrator,
whose results come back in as completion events tagged with the session they
belong to. A completion for any other session is stale and is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from capture_search.domain.errors import (
    FailureStep,
    OutOfBounds,
    SearchError,
    UploadError,
    ValidationError,
    WorkflowError,
)
from capture_search.domain.models import (
    ActionKind,
    CaptureBuffer,
    OcrResult,
    PixelBuffer,
    ScreenRegion,
    SearchOutcome,
    validate_region,
)


# States ---------------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[str] = "idle"
    last_session: int = 0

    @property
    def session(self) -> int:
        return self.last_session


@dataclass(frozen=True)
class AwaitingFrame:
    kind: ClassVar[str] = "awaiting_frame"
    session: int


@dataclass(frozen=True)
class Selecting:
    kind: ClassVar[str] = "selecting"
    session: int
    capture: CaptureBuffer


@dataclass(frozen=True)
class RegionConfirmed:
    kind: ClassVar[str] = "region_confirmed"
    session: int
    capture: CaptureBuffer


@dataclass(frozen=True)
class RunningOcr:
    kind: ClassVar[str] = "running_ocr"
    session: int
    image: PixelBuffer


class SearchPhase(str, Enum):
    UPLOADING = "uploading"
    SEARCHING = "searching"


@dataclass(frozen=True)
class RunningSearch:
    kind: ClassVar[str] = "running_search"
    session: int
    image: PixelBuffer
    phase: SearchPhase = SearchPhase.UPLOADING
    query: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class ResultReady:
    kind: ClassVar[str] = "result_ready"
    session: int
    result: OcrResult | SearchOutcome


@dataclass(frozen=True)
class Failed:
    kind: ClassVar[str] = "failed"
    session: int
    error: WorkflowError

    @property
    def step(self) -> FailureStep:
        return self.error.step


WorkflowState = Union[
    Idle,
    AwaitingFrame,
    Selecting,
    RegionConfirmed,
    RunningOcr,
    RunningSearch,
    ResultReady,
    Failed,
]

BUSY_STATES = (AwaitingFrame, RunningOcr, RunningSearch)


# Commands from the presentation and input ports ------------------------------


@dataclass(frozen=True)
class Trigger:
    source: str = "hotkey"


@dataclass(frozen=True)
class Cancel:
    source: str = "user"


@dataclass(frozen=True)
class RegionDragUpdate:
    region: ScreenRegion


@dataclass(frozen=True)
class ConfirmRegion:
    region: ScreenRegion


@dataclass(frozen=True)
class ChooseAction:
    action: ActionKind
    query: str | None = None


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class CopyText:
    pass


# Completions of effects -------------------------------------------------------


@dataclass(frozen=True)
class FrameCaptured:
    session: int
    frame: PixelBuffer


@dataclass(frozen=True)
class CaptureFailed:
    session: int
    error: WorkflowError


@dataclass(frozen=True)
class OcrSucceeded:
    session: int
    result: OcrResult


@dataclass(frozen=True)
class OcrFailed:
    session: int
    error: WorkflowError


@dataclass(frozen=True)
class UploadSucceeded:
    session: int
    image_url: str


@dataclass(frozen=True)
class UploadFailed:
    session: int
    error: WorkflowError


@dataclass(frozen=True)
class SearchSucceeded:
    session: int
    outcome: SearchOutcome


@dataclass(frozen=True)
class SearchFailed:
    session: int
    error: WorkflowError


Command = Union[Trigger, Cancel, RegionDragUpdate, ConfirmRegion, ChooseAction, Dismiss, CopyText]
Completion = Union[
    FrameCaptured,
    CaptureFailed,
    OcrSucceeded,
    OcrFailed,
    UploadSucceeded,
    UploadFailed,
    SearchSucceeded,
    SearchFailed,
]
Event = Union[Command, Completion]


# Effects ------------------------------------------------------------------------


@dataclass(frozen=True)
class RequestFrame:
    session: int


@dataclass(frozen=True)
class RecognizeText:
    session: int
    image: PixelBuffer


@dataclass(frozen=True)
class UploadImage:
    session: int
    image: PixelBuffer


@dataclass(frozen=True)
class SearchImage:
    session: int
    image_url: str
    query: str | None = None


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


Effect = Union[RequestFrame, RecognizeText, UploadImage, SearchImage, CopyToClipboard]


@dataclass(frozen=True)
class Transition:
    state: WorkflowState
    accepted: bool = True
    effect: Effect | None = None
    notice: str | None = None


def _ignored(state: WorkflowState, reason: str) -> Transition:
    return Transition(state=state, accepted=False, notice=reason)


def _fail(state: WorkflowState, error: WorkflowError) -> Transition:
    return Transition(state=Failed(session=state.session, error=error))


def _on_trigger(state: WorkflowState) -> Transition:
    if not isinstance(state, Idle):
        return _ignored(state, f"capture already in progress ({state.kind})")
    session = state.last_session + 1
    return Transition(state=AwaitingFrame(session=session), effect=RequestFrame(session=session))


def _on_cancel(state: WorkflowState) -> Transition:
    if isinstance(state, Idle):
        return _ignored(state, "nothing to cancel")
    return Transition(state=Idle(last_session=state.session), notice="capture cancelled")


def _on_dismiss(state: WorkflowState) -> Transition:
    if not isinstance(state, (ResultReady, Failed)):
        return _ignored(state, f"nothing to dismiss ({state.kind})")
    return Transition(state=Idle(last_session=state.session))


def _on_drag(state: WorkflowState, event: RegionDragUpdate) -> Transition:
    if not isinstance(state, Selecting):
        return _ignored(state, f"region drag outside selection ({state.kind})")
    return Transition(
        state=Selecting(session=state.session, capture=state.capture.with_selection(event.region))
    )


def _on_confirm(state: WorkflowState, event: ConfirmRegion) -> Transition:
    if not isinstance(state, Selecting):
        return _ignored(state, f"region confirmed outside selection ({state.kind})")
    try:
        region = validate_region(event.region, state.capture.frame)
    except ValidationError as exc:
        return Transition(state=state, accepted=False, notice=str(exc))
    return Transition(
        state=RegionConfirmed(session=state.session, capture=state.capture.with_selection(region))
    )


def _on_choose(state: WorkflowState, event: ChooseAction) -> Transition:
    if not isinstance(state, RegionConfirmed):
        return _ignored(state, f"no confirmed region ({state.kind})")
    try:
        image = state.capture.cropped_view()
    except OutOfBounds as exc:
        return _fail(state, exc)
    session = state.session
    if event.action is ActionKind.OCR:
        return Transition(
            state=RunningOcr(session=session, image=image),
            effect=RecognizeText(session=session, image=image),
        )
    return Transition(
        state=RunningSearch(session=session, image=image, query=event.query),
        effect=UploadImage(session=session, image=image),
    )


def _on_copy(state: WorkflowState) -> Transition:
    if not isinstance(state, ResultReady) or not isinstance(state.result, OcrResult):
        return _ignored(state, "no recognized text to copy")
    if state.result.is_empty:
        return _ignored(state, "no text was recognized")
    return Transition(state=state, effect=CopyToClipboard(text=state.result.full_text))


def _on_completion(state: WorkflowState, event: Completion) -> Transition:
    if isinstance(state, Idle) or event.session != state.session:
        return _ignored(state, f"stale result for session {event.session}")

    if isinstance(event, (FrameCaptured, CaptureFailed)):
        if not isinstance(state, AwaitingFrame):
            return _ignored(state, f"unexpected capture result ({state.kind})")
        if isinstance(event, CaptureFailed):
            return _fail(state, event.error)
        return Transition(
            state=Selecting(session=state.session, capture=CaptureBuffer(frame=event.frame))
        )

    if isinstance(event, (OcrSucceeded, OcrFailed)):
        if not isinstance(state, RunningOcr):
            return _ignored(state, f"unexpected OCR result ({state.kind})")
        if isinstance(event, OcrFailed):
            return _fail(state, event.error)
        return Transition(state=ResultReady(session=state.session, result=event.result))

    if not isinstance(state, RunningSearch):
        return _ignored(state, f"unexpected search result ({state.kind})")

    if isinstance(event, (UploadSucceeded, UploadFailed)):
        if state.phase is not SearchPhase.UPLOADING:
            return _ignored(state, "upload result after upload finished")
        if isinstance(event, UploadFailed):
            return _fail(state, event.error)
        if not event.image_url:
            return _fail(state, UploadError(message="Image host returned no URL"))
        return Transition(
            state=RunningSearch(
                session=state.session,
                image=state.image,
                phase=SearchPhase.SEARCHING,
                query=state.query,
                image_url=event.image_url,
            ),
            effect=SearchImage(session=state.session, image_url=event.image_url, query=state.query),
        )

    if state.phase is not SearchPhase.SEARCHING:
        return _ignored(state, "search result before upload finished")
    if isinstance(event, SearchFailed):
        return _fail(state, event.error)
    if not event.outcome.succeeded:
        return _fail(state, SearchError(reason=event.outcome.failure))
    return Transition(state=ResultReady(session=state.session, result=event.outcome))


def advance(state: WorkflowState, event: Event) -> Transition:
    """Apply one event to the current state."""

    if isinstance(event, Trigger):
        return _on_trigger(state)
    if isinstance(event, Cancel):
        return _on_cancel(state)
    if isinstance(event, Dismiss):
        return _on_dismiss(state)
    if isinstance(event, RegionDragUpdate):
        return _on_drag(state, event)
    if isinstance(event, ConfirmRegion):
        return _on_confirm(state, event)
    if isinstance(event, ChooseAction):
        return _on_choose(state, event)
    if isinstance(event, CopyText):
        return _on_copy(state)
    return _on_completion(state, event)
