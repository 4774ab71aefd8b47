from __future__ import annotations

import logging
from collections.abc import Callable

from capture_search.domain.user_settings import UserSettings
from capture_search.ports.tray_port import TrayEvent, TrayPort
from capture_search.ports.trigger_port import TriggerPort
from capture_search.services.workflow_orchestrator import CaptureOrchestrator

logger = logging.getLogger(__name__)


class InputRouter:
    """Forwards hotkey and tray events from their listener threads to the orchestrator."""

    def __init__(
        self,
        orchestrator: CaptureOrchestrator,
        trigger_port: TriggerPort,
        tray_port: TrayPort | None = None,
        on_quit: Callable[[], None] | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._trigger_port = trigger_port
        self._tray_port = tray_port
        self._on_quit = on_quit

    def start(self) -> None:
        self._trigger_port.start(self._on_hotkey, self._on_escape)
        if self._tray_port is not None:
            self._tray_port.start(self.handle_tray_event)

    def stop(self) -> None:
        self._trigger_port.stop()
        if self._tray_port is not None:
            self._tray_port.stop()

    def handle_tray_event(self, event: TrayEvent) -> None:
        logger.debug("Tray event: %s", event.value)
        if event is TrayEvent.CAPTURE:
            self._orchestrator.trigger(source="tray")
        elif event is TrayEvent.CANCEL:
            self._orchestrator.cancel(source="tray")
        elif event is TrayEvent.QUIT and self._on_quit is not None:
            self._on_quit()

    def on_settings_changed(self, previous: UserSettings, current: UserSettings) -> None:
        if previous.capture_hotkey != current.capture_hotkey:
            logger.info("Rebinding capture hotkey to %s", current.capture_hotkey)
            self._trigger_port.rebind(current.capture_hotkey)

    def _on_hotkey(self) -> None:
        self._orchestrator.trigger(source="hotkey")

    def _on_escape(self) -> None:
        self._orchestrator.cancel(source="hotkey")
