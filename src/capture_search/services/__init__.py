from .inline_executor import InlineExecutor
from .input_router import InputRouter
from .settings_service import SettingsService
from .workflow_orchestrator import CaptureOrchestrator, StateChange

__all__ = [
    "CaptureOrchestrator",
    "InlineExecutor",
    "InputRouter",
    "SettingsService",
    "StateChange",
]
