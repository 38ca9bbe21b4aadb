"""Tests for the main-thread coordinator."""

from __future__ import annotations

import pytest

from packages.core.watcher.channel import EventChannel
from packages.core.watcher.coordinator import Coordinator
from packages.core.watcher.errors import ChannelClosedError, TrayError
from packages.core.watcher.types import ProcessUpdate, Quit, resolve_icons


def feed(events: EventChannel, *samples: bool, quit_: bool = True) -> None:
    for s in samples:
        events.send(ProcessUpdate(s))
    if quit_:
        events.send(Quit())


def make(tray, events, poller, invert: bool = False) -> Coordinator:
    return Coordinator(tray, events, poller, resolve_icons(invert))


class TestIconUpdates:
    """Icon changes driven through the event channel."""

    def test_edges_only(self, tray, events, poller) -> None:
        feed(events, True, True, False)
        make(tray, events, poller).run()
        assert tray.icons == ["ok", "cancel"]

    def test_idempotent_running(self, tray, events, poller) -> None:
        feed(events, True, True, True)
        make(tray, events, poller).run()
        assert tray.icons == ["ok"]

    def test_initial_not_running_does_not_touch_tray(self, tray, events, poller) -> None:
        feed(events, False, False)
        coord = make(tray, events, poller)
        coord.run()
        assert tray.icons == []
        assert coord.last_observed is False

    def test_inverted_icons(self, tray, events, poller) -> None:
        feed(events, True, False, True)
        make(tray, events, poller, invert=True).run()
        assert tray.icons == ["cancel", "ok", "cancel"]

    def test_last_observed_tracks_latest_sample(self, tray, events, poller) -> None:
        coord = make(tray, events, poller)
        assert coord.handle(ProcessUpdate(True)) is True
        assert coord.last_observed is True
        coord.handle(ProcessUpdate(True))
        assert coord.last_observed is True
        assert tray.icons == ["ok"]


class TestQuit:
    """Shutdown handshake."""

    def test_quit_before_any_sample(self, tray, events, poller) -> None:
        events.send(Quit())
        coord = make(tray, events, poller)
        coord.run()
        assert tray.icons == []
        assert poller.calls == ["stop", "join"]
        assert coord.status == "TERMINATED"

    def test_samples_after_quit_are_not_processed(self, tray, events, poller) -> None:
        events.send(Quit())
        events.send(ProcessUpdate(True))
        make(tray, events, poller).run()
        assert tray.icons == []
        assert events.receive(timeout=0) == ProcessUpdate(True)

    def test_channel_closed_after_shutdown(self, tray, events, poller) -> None:
        feed(events, True)
        make(tray, events, poller).run()
        assert events.closed
        with pytest.raises(ChannelClosedError):
            events.send(Quit())

    def test_shutdown_is_idempotent(self, tray, events, poller) -> None:
        feed(events)
        coord = make(tray, events, poller)
        coord.run()
        coord.shutdown()
        assert poller.calls == ["stop", "join"]

    def test_handle_reports_quit(self, tray, events, poller) -> None:
        assert make(tray, events, poller).handle(Quit("test")) is False


class TestFailures:
    """Tray failures after setup are fatal."""

    def test_set_icon_failure_propagates_and_stops_poller(self, tray, events, poller) -> None:
        tray.fail_on_set = "ok"
        feed(events, True)
        coord = make(tray, events, poller)
        with pytest.raises(TrayError):
            coord.run()
        assert poller.calls == ["stop", "join"]
        assert coord.status == "TERMINATED"
