from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .channel import EventChannel
from .errors import CoordinationError
from .process_prober import ProcessProber
from .types import PollerStatus, ProcessUpdate, WatchTarget

log = logging.getLogger(__name__)


class ProcessPoller:
    """
    Background loop that samples the watched process and posts a
    ProcessUpdate per tick to the event channel.

    The inter-poll delay is a timed wait on the private stop event, so a
    stop request is noticed within one interval.
    """

    def __init__(
        self,
        target: WatchTarget,
        events: EventChannel,
        prober: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self._target = target
        self._events = events
        self._probe = prober or ProcessProber(target.match_policy)
        self._lock = threading.Lock()
        self._status: PollerStatus = "STOPPED"
        self._samples = 0

        self._thread: Optional[threading.Thread] = None
        self._stop_evt = threading.Event()

    @property
    def status(self) -> PollerStatus:
        with self._lock:
            return self._status

    @property
    def samples_sent(self) -> int:
        with self._lock:
            return self._samples

    def start(self) -> None:
        with self._lock:
            if self._status == "POLLING":
                return
            self._status = "POLLING"

        self._stop_evt.clear()
        self._thread = threading.Thread(target=self._run, name="ProcessPoller", daemon=True)
        self._thread.start()
        log.info(f"Watching {self._target.process_name!r} every {self._target.delay_ms} ms")

    def stop(self) -> None:
        """Send the stop signal. The loop must still be alive to receive it."""
        if self._thread is None or not self._thread.is_alive():
            raise CoordinationError("Polling thread is not running, cannot deliver stop signal")
        self._stop_evt.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise CoordinationError(f"Polling thread did not finish within {timeout}s")

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _sample(self) -> bool:
        try:
            return bool(self._probe(self._target.process_name))
        except Exception:
            log.exception("Process probe failed, reporting not running")
            return False

    def _run(self) -> None:
        delay = self._target.delay_seconds
        while True:
            running = self._sample()
            log.debug(f"Sample {self._target.process_name!r}: running={running}")
            self._events.send(ProcessUpdate(running))
            with self._lock:
                self._samples += 1
            if self._stop_evt.wait(delay):
                break

        with self._lock:
            self._status = "STOPPED"
        log.info("Process poller stopped")
