"""
Process-lifetime wiring — one instance of every stateful component.

The API layer builds a single NexusRuntime at startup and only talks to
the components through it.
"""

from __future__ import annotations

import logging
from types import ModuleType

from features.access import AccessGate
from features.artifacts import ArtifactStore
from features.display import DisplayState, filter_for
from features.events import EventLog, LogCategory
from features.jobs import JobExecutor, RegisterState, derive_weight
from features.jobs.backends import JobBackend
from features.link import LinkClient, LinkSession

log = logging.getLogger(__name__)


class NexusRuntime:
    def __init__(
        self,
        client: LinkClient | None = None,
        local_backend: JobBackend | None = None,
        remote_backend: JobBackend | None = None,
        artifact_db: ModuleType | None = None,
        access_pin: str | None = None,
    ):
        self.events = EventLog()
        self.events.record(LogCategory.SEC, "Kernel locked. Enter PIN.", timestamp="INIT")

        self.session = LinkSession(self.events, client)
        self.register = RegisterState()
        self.executor = JobExecutor(
            self.session,
            self.register,
            self.events,
            local=local_backend,
            remote=remote_backend,
        )
        self.access = AccessGate(self.events, access_pin)
        self.display = DisplayState(self.events)
        self.artifacts = ArtifactStore(self.events, db=artifact_db)
        self.analyzing = False

    @property
    def weight(self) -> float:
        return derive_weight(self.register.current)

    def display_state(self) -> dict:
        return {
            "mode": self.display.mode.value,
            "filter": filter_for(self.display.mode, self.weight, self.executor.running),
            "job_running": self.executor.running,
            "link_status": self.session.status.value,
            "bits": str(self.register.current),
            "weight": self.weight,
        }
