from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pytest

from packages.core.watcher.channel import EventChannel
from packages.core.watcher.errors import TrayError


class FakeTray:
    """In-memory stand-in for the tray indicator."""

    def __init__(self, title: str = "Process Watcher (test)", icon: str = "cancel") -> None:
        self.title = title
        self.initial_icon = icon
        self.icons: List[str] = []
        self.menu: Dict[str, Callable[[], None]] = {}
        self.shown = False
        self.closed = False
        self.fail_on_set: Optional[str] = None

    def set_icon(self, identity: str) -> None:
        if identity == self.fail_on_set:
            raise TrayError("set_icon", "backend refused icon")
        self.icons.append(identity)

    def add_menu_item(self, label: str, on_click: Callable[[], None]) -> None:
        self.menu[label] = on_click

    def show(self) -> None:
        self.shown = True

    def close(self) -> None:
        self.closed = True


class FakePoller:
    """Records the stop/join handshake without running a thread."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def stop(self) -> None:
        self.calls.append("stop")

    def join(self, timeout: Optional[float] = None) -> None:
        self.calls.append("join")


@pytest.fixture
def tray() -> FakeTray:
    return FakeTray()


@pytest.fixture
def poller() -> FakePoller:
    return FakePoller()


@pytest.fixture
def events() -> EventChannel:
    return EventChannel()
