"""Command-line parsing for the tray watcher."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from packages.core.watcher.types import DEFAULT_DELAY_MS

DIST_NAME = "process-watcher"


def app_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0+local"


class VersionedHelpParser(argparse.ArgumentParser):
    """ArgumentParser whose help and usage output starts with the version line."""

    def format_help(self) -> str:
        return f"Version: {app_version()}\n{super().format_help()}"


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = VersionedHelpParser(
        prog=prog,
        usage="%(prog)s PROCESS_NAME [options]",
        description="Show whether a process is running as a system tray icon.",
    )
    parser.add_argument("process_name", nargs="*", metavar="PROCESS_NAME", help="Exact name of the process to watch")
    parser.add_argument("-v", "--version", action="version", version=f"Version: {app_version()}", help="Displays the version")
    parser.add_argument("-i", "--invert", action="store_true", help="Inverts the icons")
    parser.add_argument(
        "-d", "--delay", type=int, default=DEFAULT_DELAY_MS, metavar="MS",
        help=f"Delay in ms before refreshing status (default {DEFAULT_DELAY_MS})",
    )
    parser.add_argument(
        "-m", "--match", choices=("first", "any"), default="first",
        help="Report the first same-named process (default) or any running instance",
    )
    parser.add_argument("--debug", action="store_true", help="Log every sample")
    return parser

