from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from capture_search.domain.errors import (
    CaptureError,
    OcrError,
    SearchError,
    UploadError,
)
from capture_search.domain.models import ActionKind, ScreenRegion
from capture_search.domain.workflow import (
    BUSY_STATES,
    Cancel,
    CaptureFailed,
    ChooseAction,
    Command,
    Completion,
    ConfirmRegion,
    CopyText,
    CopyToClipboard,
    Dismiss,
    Effect,
    Event,
    Failed,
    FrameCaptured,
    Idle,
    OcrFailed,
    OcrSucceeded,
    RecognizeText,
    RegionDragUpdate,
    RequestFrame,
    SearchFailed,
    SearchImage,
    SearchSucceeded,
    Trigger,
    UploadFailed,
    UploadImage,
    UploadSucceeded,
    WorkflowState,
    advance,
)
from capture_search.ports.capture_port import CapturePort
from capture_search.ports.clipboard_port import ClipboardPort
from capture_search.ports.image_hosting_port import ImageHostingPort
from capture_search.ports.ocr_port import OCRPort
from capture_search.ports.search_port import SearchPort

logger = logging.getLogger(__name__)

_STOP = object()


@dataclass(frozen=True)
class StateChange:
    previous: WorkflowState
    current: WorkflowState
    event: Event
    notice: str | None = None

    @property
    def changed(self) -> bool:
        return self.previous is not self.current


StateListener = Callable[[StateChange], None]


class CaptureOrchestrator:
    """Owns the capture workflow state and serializes every event that touches it.

    Commands may be submitted from any thread. They are queued and applied one
    at a time, either by the worker thread started with ``start()`` or by
    ``drain()`` on the calling thread. Adapter calls run on ``executor`` and
    report back through the same queue.
    """

    def __init__(
        self,
        capture: CapturePort,
        ocr: OCRPort,
        image_host: ImageHostingPort,
        search: SearchPort,
        clipboard: ClipboardPort | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._capture = capture
        self._ocr = ocr
        self._image_host = image_host
        self._search = search
        self._clipboard = clipboard
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="capture-io"
        )
        self._state: WorkflowState = Idle()
        self._queue: queue.Queue = queue.Queue()
        self._process_lock = threading.Lock()
        self._listeners: list[StateListener] = []
        self._listeners_lock = threading.Lock()
        self._worker: threading.Thread | None = None

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return isinstance(self._state, BUSY_STATES)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def submit(self, command: Command) -> None:
        self._queue.put(command)

    def trigger(self, source: str = "hotkey") -> None:
        self.submit(Trigger(source=source))

    def cancel(self, source: str = "user") -> None:
        self.submit(Cancel(source=source))

    def update_region(self, region: ScreenRegion) -> None:
        self.submit(RegionDragUpdate(region=region))

    def confirm_region(self, region: ScreenRegion) -> None:
        self.submit(ConfirmRegion(region=region))

    def choose_action(self, action: ActionKind, query: str | None = None) -> None:
        self.submit(ChooseAction(action=action, query=query))

    def dismiss(self) -> None:
        self.submit(Dismiss())

    def copy_text(self) -> None:
        self.submit(CopyText())

    def start(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(
            target=self._run, name="capture-orchestrator", daemon=True
        )
        self._worker.start()
        logger.debug("Orchestrator worker started")

    def stop(self, timeout: float | None = 5.0) -> None:
        worker = self._worker
        if worker is not None:
            self._queue.put(_STOP)
            worker.join(timeout)
            self._worker = None
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("Orchestrator stopped")

    def drain(self) -> int:
        """Apply every queued event on the calling thread; returns how many ran."""

        processed = 0
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return processed
            if event is _STOP:
                continue
            self._process(event)
            processed += 1

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            if event is _STOP:
                return
            try:
                self._process(event)
            except Exception:
                logger.exception("Unhandled error while processing %r", event)

    def _process(self, event: Event) -> None:
        with self._process_lock:
            previous = self._state
            transition = advance(previous, event)
            if not transition.accepted:
                logger.debug("Ignored %s in %s: %s", type(event).__name__, previous.kind, transition.notice)
                if isinstance(event, (ConfirmRegion, Trigger)) and transition.notice:
                    self._publish(StateChange(previous, previous, event, transition.notice))
                return
            self._state = transition.state
            if transition.state is not previous:
                logger.info(
                    "Session %s: %s -> %s (%s)",
                    transition.state.session,
                    previous.kind,
                    transition.state.kind,
                    type(event).__name__,
                )
            if isinstance(transition.state, Failed):
                error = transition.state.error
                logger.warning("Session %s failed at %s: %s", transition.state.session, error.step.value, error)
            self._publish(StateChange(previous, transition.state, event, transition.notice))
            if transition.effect is not None:
                self._dispatch(transition.effect)

    def _publish(self, change: StateChange) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def _dispatch(self, effect: Effect) -> None:
        if isinstance(effect, CopyToClipboard):
            self._copy_to_clipboard(effect.text)
            return
        try:
            future = self._executor.submit(self._perform, effect)
        except RuntimeError as exc:
            logger.error("Could not schedule %s: %s", type(effect).__name__, exc)
            self._queue.put(_failure_for(effect, exc))
            return
        future.add_done_callback(self._enqueue_completion)

    def _enqueue_completion(self, future: Future) -> None:
        if future.cancelled():
            return
        self._queue.put(future.result())

    def _perform(self, effect: Effect) -> Completion:
        try:
            return self._call(effect)
        except Exception as exc:
            return _failure_for(effect, exc)

    def _call(self, effect: Effect) -> Completion:
        session = effect.session
        if isinstance(effect, RequestFrame):
            return FrameCaptured(session=session, frame=self._capture.capture_full_frame())
        if isinstance(effect, RecognizeText):
            return OcrSucceeded(session=session, result=self._ocr.recognize(effect.image))
        if isinstance(effect, UploadImage):
            return UploadSucceeded(session=session, image_url=self._image_host.upload(effect.image))
        return SearchSucceeded(
            session=session, outcome=self._search.search(effect.image_url, query=effect.query)
        )

    def _copy_to_clipboard(self, text: str) -> None:
        if self._clipboard is None:
            logger.warning("No clipboard configured; %d characters not copied", len(text))
            return
        try:
            self._clipboard.copy_text(text)
        except Exception:
            logger.exception("Copying recognized text to the clipboard failed")
            return
        logger.info("Copied %d characters to the clipboard", len(text))


_FAILURES = {
    RequestFrame: (CaptureFailed, CaptureError),
    RecognizeText: (OcrFailed, OcrError),
    UploadImage: (UploadFailed, UploadError),
    SearchImage: (SearchFailed, SearchError),
}


def _failure_for(effect: Effect, exc: Exception) -> Completion:
    completion_type, error_type = _FAILURES[type(effect)]
    if isinstance(exc, error_type):
        error = exc
    else:
        logger.debug("Wrapping %s as %s", type(exc).__name__, error_type.__name__, exc_info=exc)
        detail = str(exc) or type(exc).__name__
        if error_type in (UploadError, SearchError):
            error = error_type(message=detail)
        else:
            error = error_type(detail)
    return completion_type(session=effect.session, error=error)
