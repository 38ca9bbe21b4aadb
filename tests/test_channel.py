"""Tests for the coordinator's event channel."""

from __future__ import annotations

import queue
import threading

import pytest

from packages.core.watcher.errors import ChannelClosedError, CoordinationError
from packages.core.watcher.types import ProcessUpdate, Quit


class TestEventChannel:
    def test_delivers_in_send_order(self, events) -> None:
        sent = [ProcessUpdate(True), ProcessUpdate(False), Quit()]
        for m in sent:
            events.send(m)
        assert [events.receive() for _ in sent] == sent

    def test_receive_timeout(self, events) -> None:
        with pytest.raises(queue.Empty):
            events.receive(timeout=0.01)

    def test_multiple_producers(self, events) -> None:
        def produce(value: bool) -> None:
            for _ in range(100):
                events.send(ProcessUpdate(value))

        threads = [threading.Thread(target=produce, args=(v,)) for v in (True, False)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        received = [events.receive(timeout=1.0) for _ in range(200)]
        assert received.count(ProcessUpdate(True)) == 100
        with pytest.raises(queue.Empty):
            events.receive(timeout=0)

    def test_send_after_close(self, events) -> None:
        events.close()
        assert events.closed
        with pytest.raises(ChannelClosedError):
            events.send(Quit())

    def test_closed_error_is_coordination_error(self) -> None:
        assert issubclass(ChannelClosedError, CoordinationError)
