from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

IconIdentity = Literal["ok", "cancel"]
MatchPolicy = Literal["first", "any"]
PollerStatus = Literal["POLLING", "STOPPED"]
CoordinatorStatus = Literal["RUNNING", "TERMINATING", "TERMINATED"]

DEFAULT_DELAY_MS = 2500


@dataclass(frozen=True)
class WatchTarget:
    """What to watch and how often. Built once at startup, never mutated."""
    process_name: str
    delay_ms: int = DEFAULT_DELAY_MS
    invert_icons: bool = False
    match_policy: MatchPolicy = "first"

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


@dataclass(frozen=True)
class IconPair:
    running: IconIdentity
    stopped: IconIdentity


def resolve_icons(invert: bool) -> IconPair:
    if invert:
        return IconPair(running="cancel", stopped="ok")
    return IconPair(running="ok", stopped="cancel")


@dataclass(frozen=True)
class ProcessUpdate:
    running: bool


@dataclass(frozen=True)
class Quit:
    reason: str = "menu"


Message = Union[ProcessUpdate, Quit]
