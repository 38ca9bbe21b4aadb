from __future__ import annotations


class WatcherError(Exception):
    """Base class for process watcher failures."""


class TrayError(WatcherError):
    """The tray indicator could not be created or updated."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason


class CoordinationError(WatcherError):
    """A peer thread is gone or a message could not be delivered."""


class ChannelClosedError(CoordinationError):
    pass
