from __future__ import annotations

import logging
import signal
import sys
import threading
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from packages.core.logging_ import setup_logging
from packages.core.tray.indicator import PystrayIndicator, TrayIndicator
from packages.core.watcher.channel import EventChannel
from packages.core.watcher.coordinator import Coordinator
from packages.core.watcher.errors import ChannelClosedError, TrayError
from packages.core.watcher.poller import ProcessPoller
from packages.core.watcher.types import IconIdentity, Quit, resolve_icons
from packages.shared.config import AppConfig
from .cli import build_parser

log = logging.getLogger(__name__)

IndicatorFactory = Callable[[str, IconIdentity], TrayIndicator]


def _quit_sender(events: EventChannel, reason: str) -> Callable[[], None]:
    def send_quit() -> None:
        log.info(f"Quit ({reason})")
        try:
            events.send(Quit(reason))
        except ChannelClosedError:
            log.debug("Quit after shutdown ignored")
    return send_quit


def run(
    config: AppConfig,
    indicator_factory: IndicatorFactory = PystrayIndicator,
    prober: Optional[Callable[[str], bool]] = None,
) -> int:
    """Build the tray, poller and coordinator, and block until Quit."""
    target = config.to_watch_target()
    icons = resolve_icons(target.invert_icons)
    events = EventChannel()
    send_quit = _quit_sender(events, "menu")

    try:
        tray = indicator_factory(config.tray_title, icons.stopped)
    except TrayError as e:
        print(f"Error: Failed to create Tray Item: {e.reason}", file=sys.stderr)
        return 1

    try:
        tray.add_menu_item("Quit", send_quit)
        tray.show()
    except TrayError as e:
        print(f"Error: Failed to set up Tray Item: {e}", file=sys.stderr)
        tray.close()
        return 1

    poller = ProcessPoller(target, events, prober)
    coordinator = Coordinator(tray, events, poller, icons)

    # Ctrl+C goes through the same path as the menu's Quit
    prev_handler = None
    on_main_thread = threading.current_thread() is threading.main_thread()
    if on_main_thread:
        on_sigint = _quit_sender(events, "interrupt")
        prev_handler = signal.signal(signal.SIGINT, lambda sig, frame: on_sigint())

    poller.start()
    try:
        coordinator.run()
    finally:
        if on_main_thread and prev_handler is not None:
            signal.signal(signal.SIGINT, prev_handler)
        tray.close()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    process_name = " ".join(args.process_name)

    if not process_name:
        parser.print_help()
        return 0

    try:
        config = AppConfig(
            process_name=process_name,
            invert_icons=args.invert,
            delay_ms=args.delay,
            match_policy=args.match,
            debug=args.debug,
        )
    except ValidationError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e.errors()[0]['msg']}", file=sys.stderr)
        return 2

    setup_logging(config.debug)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
