"""
Edge-triggered icon policy.

Two states (last observed running / not running). A sample only produces an
icon change when it differs from the last observed value; the initial state
is "not running", so a first "not running" sample never touches the tray.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import IconIdentity, IconPair


@dataclass(frozen=True)
class Transition:
    last: bool
    icon: Optional[IconIdentity] = None


def next_state(last: bool, sample: bool, icons: IconPair) -> Transition:
    if not last and sample:
        return Transition(last=True, icon=icons.running)
    if last and not sample:
        return Transition(last=False, icon=icons.stopped)
    return Transition(last=sample)
