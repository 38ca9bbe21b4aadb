"""
Process prober backed by psutil.

Answers a single question per call: is a process with this exact name
currently alive? "No such process" is a normal False, never an error.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Protocol

import psutil

from .types import MatchPolicy

log = logging.getLogger(__name__)

# Statuses of a process that is alive and schedulable. Stopped, traced,
# zombie and dead processes are not. Sleeping counts: an idle daemon is up.
RUNNING_STATUSES = frozenset({
    psutil.STATUS_RUNNING,
    psutil.STATUS_SLEEPING,
    psutil.STATUS_DISK_SLEEP,
    psutil.STATUS_IDLE,
    psutil.STATUS_WAKING,
})


class Prober(Protocol):
    def __call__(self, name: str) -> bool:
        ...


def is_running_status(status: Optional[str]) -> bool:
    return status in RUNNING_STATUSES


def _statuses_by_name(name: str, procs: Iterable[psutil.Process]) -> Iterator[Optional[str]]:
    for p in procs:
        try:
            if p.info.get("name") == name:
                yield p.info.get("status")
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue


def process_running(name: str, policy: MatchPolicy = "first") -> bool:
    """
    Return True if a process named ``name`` is in a running state.

    With ``policy="first"`` only the first name match is inspected, so a
    stopped instance enumerated before a running one reports False.
    With ``policy="any"`` every name match is inspected.
    """
    try:
        procs = psutil.process_iter(attrs=["name", "status"])
        for status in _statuses_by_name(name, procs):
            if is_running_status(status):
                return True
            if policy == "first":
                return False
    except (psutil.Error, OSError) as e:
        log.debug(f"Process table query failed for {name!r}: {e}")
    return False


class ProcessProber:
    """Callable prober bound to a match policy."""

    def __init__(self, policy: MatchPolicy = "first") -> None:
        self.policy = policy

    def __call__(self, name: str) -> bool:
        return process_running(name, self.policy)
