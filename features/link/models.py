"""
Data models for the hardware link.

LinkStatus is a closed set of states; the only way between them is the
transition table below.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LinkStatus(str, Enum):
    DISCONNECTED = "DISCONNECTED"
    AUTHENTICATING = "AUTHENTICATING"
    READY = "READY"
    BUSY = "BUSY"

    def can_transition_to(self, target: LinkStatus) -> bool:
        return target in TRANSITIONS[self]

    @property
    def in_flight(self) -> bool:
        """True while an authentication or remote job is outstanding."""
        return self in (LinkStatus.AUTHENTICATING, LinkStatus.BUSY)


TRANSITIONS: dict[LinkStatus, frozenset[LinkStatus]] = {
    LinkStatus.DISCONNECTED: frozenset({LinkStatus.AUTHENTICATING}),
    LinkStatus.AUTHENTICATING: frozenset({LinkStatus.READY, LinkStatus.DISCONNECTED}),
    LinkStatus.READY: frozenset({LinkStatus.BUSY, LinkStatus.AUTHENTICATING}),
    LinkStatus.BUSY: frozenset({LinkStatus.READY}),
}


@dataclass(frozen=True)
class LinkSnapshot:
    """Read-only view of the session for display code."""
    status: LinkStatus
    session_preview: str | None = None
    has_credential: bool = False
