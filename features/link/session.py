"""
Link Session — process-lifetime connection state to the compute backend.

Only authenticate() and the job executor (via begin_job/end_job) may move
the status. Every path through authenticate() ends in READY or
DISCONNECTED; nothing leaves the session in AUTHENTICATING.
"""

from __future__ import annotations

import asyncio
import logging

from features.events import EventLog, LogCategory
from features.link.client import LinkClient
from features.link.errors import (
    CredentialRejected,
    IllegalTransition,
    LinkBusy,
    LinkUnreachable,
    MissingCredential,
)
from features.link.models import LinkSnapshot, LinkStatus

log = logging.getLogger(__name__)


def preview(value: str | None, length: int = 8) -> str | None:
    """Non-sensitive prefix of an identifier for logs and display."""
    if not value:
        return None
    return f"{value[:length]}..."


class LinkSession:
    """Owns LinkStatus, the credential and the backend session id."""

    def __init__(self, events: EventLog, client: LinkClient | None = None):
        self.events = events
        self.client = client or LinkClient()
        self._status = LinkStatus.DISCONNECTED
        self._credential: str | None = None
        self._session_id: str | None = None

    @property
    def status(self) -> LinkStatus:
        return self._status

    @property
    def session_id(self) -> str | None:
        return self._session_id

    def snapshot(self) -> LinkSnapshot:
        return LinkSnapshot(
            status=self._status,
            session_preview=preview(self._session_id),
            has_credential=self._credential is not None,
        )

    def _transition(self, target: LinkStatus) -> None:
        if not self._status.can_transition_to(target):
            raise IllegalTransition(f"{self._status.value} -> {target.value}")
        log.debug("Link %s -> %s", self._status.value, target.value)
        self._status = target

    def _disconnect(self) -> None:
        self._credential = None
        self._session_id = None
        self._transition(LinkStatus.DISCONNECTED)

    async def authenticate(self, credential: str | None) -> LinkStatus:
        """Validate a credential against the auth endpoint.

        Raises MissingCredential, LinkBusy, CredentialRejected or
        LinkUnreachable after the event has been logged and the status
        resolved.
        """
        if not credential:
            self.events.record(LogCategory.ERR, "MissingCredential: API token required.")
            raise MissingCredential("API token required")
        if self._status.in_flight:
            self.events.record(LogCategory.WARN, f"LinkBusy: link is {self._status.value}.")
            raise LinkBusy(f"Link is {self._status.value}")

        self._transition(LinkStatus.AUTHENTICATING)
        self._session_id = None
        self.events.record(LogCategory.LINK, "Initiating REST handshake...")

        try:
            session_id = await self.client.login(credential)
        except CredentialRejected as e:
            self._disconnect()
            self.events.record(LogCategory.ERR, f"CredentialRejected: {e}", e.detail)
            raise
        except LinkUnreachable as e:
            self._disconnect()
            self.events.record(LogCategory.ERR, "LinkUnreachable: link blocked (network).", e.detail)
            self.events.record(LogCategory.DEBUG, "Request to the auth endpoint never completed.")
            raise
        except asyncio.CancelledError:
            self._disconnect()
            self.events.record(LogCategory.WARN, "Handshake abandoned.")
            raise
        except Exception as e:
            self._disconnect()
            self.events.record(LogCategory.ERR, "LinkUnreachable: handshake failed.", e.__class__.__name__)
            raise LinkUnreachable("Handshake failed", detail=e.__class__.__name__) from e

        self._credential = credential
        self._session_id = session_id
        self._transition(LinkStatus.READY)
        self.events.record(
            LogCategory.LINK,
            "Authentication successful.",
            f"Access_ID: {preview(session_id)}",
        )
        return self._status

    # ── Job executor hooks ────────────────────────────────────────────

    def begin_job(self) -> None:
        """READY -> BUSY. Raises LinkBusy if a job is already outstanding."""
        if self._status is LinkStatus.BUSY:
            raise LinkBusy("A remote job is already running")
        self._transition(LinkStatus.BUSY)

    def end_job(self) -> None:
        """BUSY -> READY."""
        self._transition(LinkStatus.READY)
