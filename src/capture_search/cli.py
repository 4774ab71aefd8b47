from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
from collections.abc import Callable

from capture_search.domain.errors import ConfigError, describe_failure
from capture_search.domain.models import ActionKind, OcrResult, PixelBuffer, ScreenRegion
from capture_search.domain.workflow import (
    ConfirmRegion,
    Failed,
    RegionConfirmed,
    ResultReady,
    Selecting,
)
from capture_search.logging_config import configure_logging
from capture_search.services.inline_executor import InlineExecutor
from capture_search.services.workflow_orchestrator import CaptureOrchestrator, StateChange
from capture_search.settings import LOG_LEVEL

logger = logging.getLogger(__name__)

RegionPicker = Callable[[PixelBuffer], ScreenRegion]


class HeadlessSession:
    """Drives each capture session without a UI: picks the region, runs the action, prints the result."""

    def __init__(
        self,
        orchestrator: CaptureOrchestrator,
        pick_region: RegionPicker,
        action: ActionKind,
        query: str | None = None,
        copy: bool = False,
        verbose: bool = False,
        out=None,
    ) -> None:
        self._orchestrator = orchestrator
        self._pick_region = pick_region
        self._action = action
        self._query = query
        self._copy = copy
        self._verbose = verbose
        self._out = out or sys.stdout
        self.succeeded: bool | None = None

    def __call__(self, change: StateChange) -> None:
        state = change.current
        if not change.changed:
            if isinstance(change.event, ConfirmRegion) and change.notice:
                print(f"Selection rejected: {change.notice}", file=self._out)
                self.succeeded = False
                self._orchestrator.cancel(source="cli")
            return
        if isinstance(state, Selecting):
            self._orchestrator.confirm_region(self._pick_region(state.capture.frame))
        elif isinstance(state, RegionConfirmed):
            self._orchestrator.choose_action(self._action, query=self._query)
        elif isinstance(state, ResultReady):
            self._print_result(state.result)
            self.succeeded = True
            if self._copy and isinstance(state.result, OcrResult):
                self._orchestrator.copy_text()
            self._orchestrator.dismiss()
        elif isinstance(state, Failed):
            print(f"Error: {describe_failure(state.error)}", file=self._out)
            self.succeeded = False
            self._orchestrator.dismiss()

    def _print_result(self, result) -> None:
        if isinstance(result, OcrResult):
            if result.is_empty:
                print("No text found.", file=self._out)
                return
            print(result.full_text, file=self._out)
            if self._verbose:
                for word in result.words:
                    print(
                        f"  {word.text!r} conf={word.confidence:.2f} box={word.box}",
                        file=self._out,
                    )
            return
        print(result.target, file=self._out)


def fixed_region(region: ScreenRegion) -> RegionPicker:
    return lambda _frame: region


def region_around_cursor(
    cursor,
    width: int,
    height: int,
    frame_origin: Callable[[], tuple[int, int]] = lambda: (0, 0),
) -> RegionPicker:
    """Centre a box on the pointer, translated from screen to frame coordinates."""

    def pick(frame: PixelBuffer) -> ScreenRegion:
        screen_x, screen_y = cursor.position()
        left_edge, top_edge = frame_origin()
        x, y = screen_x - left_edge, screen_y - top_edge
        box_width = min(width, frame.width)
        box_height = min(height, frame.height)
        left = min(max(x - box_width // 2, 0), frame.width - box_width)
        top = min(max(y - box_height // 2, 0), frame.height - box_height)
        return ScreenRegion(origin_x=left, origin_y=top, width=box_width, height=box_height)

    return pick


def _parse_size(value: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {value!r}") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("Size must be positive")
    return width, height


def _parse_region(value: str) -> ScreenRegion:
    try:
        return ScreenRegion.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _add_session_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--action", choices=[kind.value for kind in ActionKind], default=ActionKind.OCR.value
    )
    parser.add_argument("--query", help="Optional text added to an image search.")
    parser.add_argument("--copy", action="store_true", help="Copy recognized text to the clipboard.")
    parser.add_argument("--no-browser", action="store_true", help="Print the search URL instead of opening it.")
    parser.add_argument("--verbose", action="store_true", help="Print every recognized word.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="capture-search")
    parser.add_argument("--settings", help="Path to the settings JSON file.")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    commands = parser.add_subparsers(dest="command", required=True)

    capture = commands.add_parser("capture", help="Capture the screen once and act on a region.")
    capture.add_argument("--region", type=_parse_region, required=True, help="x,y,width,height")
    _add_session_arguments(capture)

    listen = commands.add_parser("listen", help="Run a session every time the capture hotkey is pressed.")
    target = listen.add_mutually_exclusive_group(required=True)
    target.add_argument("--region", type=_parse_region, help="x,y,width,height")
    target.add_argument("--size", type=_parse_size, help="WIDTHxHEIGHT box centred on the pointer")
    _add_session_arguments(listen)

    settings = commands.add_parser("settings", help="Show or change user settings.")
    settings_commands = settings.add_subparsers(dest="settings_command", required=True)
    settings_commands.add_parser("show")
    set_parser = settings_commands.add_parser("set")
    set_parser.add_argument("key")
    set_parser.add_argument("value")
    return parser


def _run_capture(args: argparse.Namespace, services: dict) -> int:
    orchestrator: CaptureOrchestrator = services["orchestrator"]
    session = HeadlessSession(
        orchestrator,
        fixed_region(args.region),
        ActionKind(args.action),
        query=args.query,
        copy=args.copy,
        verbose=args.verbose,
    )
    orchestrator.subscribe(session)
    orchestrator.trigger(source="cli")
    orchestrator.drain()
    return 0 if session.succeeded else 1


def _run_listen(args: argparse.Namespace, services: dict) -> int:
    from capture_search.container import build_input_router

    stopped = threading.Event()
    router = build_input_router(services, on_quit=stopped.set)
    orchestrator: CaptureOrchestrator = services["orchestrator"]
    if args.region is not None:
        picker = fixed_region(args.region)
    else:
        capture = services["capture"]
        picker = region_around_cursor(
            services["cursor"], *args.size, frame_origin=lambda: capture.origin
        )
    orchestrator.subscribe(
        HeadlessSession(
            orchestrator,
            picker,
            ActionKind(args.action),
            query=args.query,
            copy=args.copy,
            verbose=args.verbose,
        )
    )
    orchestrator.start()
    router.start()
    hotkey = services["settings_service"].snapshot().capture_hotkey
    print(f"Press {hotkey} to capture, Escape to cancel, Ctrl+C to exit.")
    try:
        while not stopped.wait(0.5):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        router.stop()
        orchestrator.stop()
    return 0


def _run_settings(args: argparse.Namespace, services: dict) -> int:
    settings_service = services["settings_service"]
    if args.settings_command == "set":
        settings_service.update(**{args.key: args.value})
    print(json.dumps(settings_service.snapshot().to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    from capture_search.container import build_services

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    one_shot = args.command == "capture"
    try:
        services = build_services(
            settings_path=args.settings,
            executor=InlineExecutor() if one_shot else None,
            open_browser=not getattr(args, "no_browser", False),
        )
        if args.command == "capture":
            return _run_capture(args, services)
        if args.command == "listen":
            return _run_listen(args, services)
        return _run_settings(args, services)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
