from __future__ import annotations

import queue
import threading
from typing import Optional

from .errors import ChannelClosedError
from .types import Message


class EventChannel:
    """
    Unbounded multi-producer / single-consumer inbox of the coordinator.

    Backed by ``queue.SimpleQueue`` so ``send`` never blocks and is safe to
    call from a signal handler. Delivery order is preserved per sender only.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Message] = queue.SimpleQueue()
        self._closed = threading.Event()

    def send(self, msg: Message) -> None:
        if self._closed.is_set():
            raise ChannelClosedError(f"Event channel is closed, dropped {msg!r}")
        self._queue.put(msg)

    def receive(self, timeout: Optional[float] = None) -> Message:
        """Block until a message arrives. Raises ``queue.Empty`` on timeout."""
        return self._queue.get(timeout=timeout)

    def close(self) -> None:
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()
