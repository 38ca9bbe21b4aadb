"""
Main-thread coordinator.

Sole consumer of the event channel and sole owner of the last observed
state and the tray handle. Runs until a Quit message arrives, then stops
the poller and waits for its thread to finish.
"""

from __future__ import annotations

import logging
from typing import Optional

from packages.core.tray.indicator import TrayIndicator

from .channel import EventChannel
from .icon_state import next_state
from .poller import ProcessPoller
from .types import CoordinatorStatus, IconPair, Message, ProcessUpdate, Quit

log = logging.getLogger(__name__)


class Coordinator:
    def __init__(
        self,
        tray: TrayIndicator,
        events: EventChannel,
        poller: ProcessPoller,
        icons: IconPair,
        join_timeout: Optional[float] = None,
    ) -> None:
        self._tray = tray
        self._events = events
        self._poller = poller
        self._icons = icons
        self._join_timeout = join_timeout
        self._last = False
        self._status: CoordinatorStatus = "RUNNING"

    @property
    def status(self) -> CoordinatorStatus:
        return self._status

    @property
    def last_observed(self) -> bool:
        return self._last

    def handle(self, msg: Message) -> bool:
        """Apply one message. Returns False when the receive loop must end."""
        if isinstance(msg, Quit):
            log.info(f"Quit requested ({msg.reason})")
            return False
        if isinstance(msg, ProcessUpdate):
            t = next_state(self._last, msg.running, self._icons)
            if t.icon is not None:
                log.info(f"Process {'started' if t.last else 'stopped'}, icon -> {t.icon}")
                self._tray.set_icon(t.icon)
            self._last = t.last
            return True
        log.warning(f"Ignoring unknown message {msg!r}")
        return True

    def run(self) -> None:
        try:
            while self.handle(self._events.receive()):
                pass
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        if self._status != "RUNNING":
            return
        self._status = "TERMINATING"
        self._poller.stop()
        self._poller.join(self._join_timeout)
        self._events.close()
        self._status = "TERMINATED"
        log.info("Coordinator terminated")
