"""
Job Executor — runs one job and publishes its register.

Backend selection happens in one place (_select): the remote backend only
when the caller asked for it AND the link is READY, the local backend
otherwise. The remote path brackets the work with begin_job/end_job so BUSY
is entered and left inside the same call, on every path.

Policy for overlapping requests: a run_job call while another job is
outstanding, or while the link is AUTHENTICATING/BUSY, is rejected with
LinkBusy. It is neither queued nor silently downgraded.
"""

from __future__ import annotations

import asyncio
import logging

import config
from features.events import EventLog, LogCategory
from features.jobs.backends import JobBackend, LocalBackend, RemoteBackend, SimulatedRemoteBackend
from features.jobs.models import BitRegister, RegisterState
from features.link.errors import JobPipelineInterrupted, LinkBusy
from features.link.models import LinkStatus
from features.link.session import LinkSession

log = logging.getLogger(__name__)


def default_remote_backend(session: LinkSession) -> JobBackend:
    if config.REMOTE_JOB_SIMULATED:
        return SimulatedRemoteBackend()
    return RemoteBackend(session)


class JobExecutor:
    def __init__(
        self,
        session: LinkSession,
        register: RegisterState,
        events: EventLog,
        local: JobBackend | None = None,
        remote: JobBackend | None = None,
        timeout: float = config.JOB_TIMEOUT_SEC,
    ):
        self.session = session
        self.register = register
        self.events = events
        self.local = local or LocalBackend()
        self.remote = remote or default_remote_backend(session)
        self.timeout = timeout
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def _select(self, requested_remote: bool) -> JobBackend:
        if requested_remote and self.session.status is LinkStatus.READY:
            return self.remote
        if requested_remote:
            self.events.record(LogCategory.WARN, "Using local simulation (no link).")
        return self.local

    async def run_job(self, requested_remote: bool) -> BitRegister:
        """Run one job and publish the resulting register.

        Raises LinkBusy if another job or handshake is outstanding, and
        JobPipelineInterrupted if the remote work fails. The published
        register is left untouched on failure.
        """
        status = self.session.status
        if self._running or status.in_flight:
            self.events.record(LogCategory.WARN, f"LinkBusy: job rejected, link is {status.value}.")
            raise LinkBusy(f"Job already outstanding (link {status.value})")

        backend = self._select(requested_remote)
        if backend.remote:
            return await self._run_remote(backend)
        return await self._run_local(backend)

    async def _run_local(self, backend: JobBackend) -> BitRegister:
        self._running = True
        try:
            register = await backend.run()
        finally:
            self._running = False
        self.register.publish(register)
        self.events.record(LogCategory.SYS, "Local registry collapsed.", str(register))
        return register

    async def _run_remote(self, backend: JobBackend) -> BitRegister:
        self.session.begin_job()
        self._running = True
        self.events.record(LogCategory.QASM, f"Parity key active: {config.PARITY_KEY}")
        try:
            register = await asyncio.wait_for(backend.run(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            self.events.record(
                LogCategory.ERR, "JobPipelineInterrupted: remote job timed out.", f"{self.timeout:g}s"
            )
            raise JobPipelineInterrupted("Remote job timed out") from e
        except JobPipelineInterrupted as e:
            self.events.record(LogCategory.ERR, f"JobPipelineInterrupted: {e}", e.detail)
            raise
        except Exception as e:
            log.error("Remote job failed: %s", e, exc_info=True)
            self.events.record(LogCategory.ERR, "JobPipelineInterrupted.", e.__class__.__name__)
            raise JobPipelineInterrupted(str(e) or e.__class__.__name__) from e
        finally:
            self._running = False
            self.session.end_job()

        self.register.publish(register)
        self.events.record(LogCategory.CORE, f"Teleportation resolved: {register}")
        return register
