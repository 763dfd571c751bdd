"""
Job backends — the interchangeable ways of producing a BitRegister.

LocalBackend             in-process draw after a short delay
SimulatedRemoteBackend   timed stand-in for the remote exchange
RemoteBackend            real submit + poll against the job API
"""

from __future__ import annotations

import abc
import asyncio
import logging
import random

import config
from features.jobs.models import BitRegister
from features.link.client import FAILED_JOB_STATES, LinkClient, extract_bitstring
from features.link.errors import JobPipelineInterrupted
from features.link.session import LinkSession

log = logging.getLogger(__name__)


def build_program(width: int = config.BIT_COUNT) -> str:
    """OpenQASM 2 circuit: Hadamard on every qubit, then measure all."""
    lines = [
        "OPENQASM 2.0;",
        'include "qelib1.inc";',
        f"qreg q[{width}];",
        f"creg c[{width}];",
    ]
    lines += [f"h q[{i}];" for i in range(width)]
    lines.append("measure q -> c;")
    return "\n".join(lines)


class JobBackend(abc.ABC):
    name: str = "backend"
    remote: bool = False

    @abc.abstractmethod
    async def run(self) -> BitRegister:
        """Perform one unit of work and return a fresh register."""


class LocalBackend(JobBackend):
    name = "local"

    def __init__(self, delay: float = config.LOCAL_JOB_DELAY_SEC, rng: random.Random | None = None):
        self.delay = delay
        self.rng = rng

    async def run(self) -> BitRegister:
        await asyncio.sleep(self.delay)
        return BitRegister.draw(self.rng)


class SimulatedRemoteBackend(LocalBackend):
    name = "remote-simulated"
    remote = True

    def __init__(self, delay: float = config.REMOTE_JOB_DELAY_SEC, rng: random.Random | None = None):
        super().__init__(delay=delay, rng=rng)


class RemoteBackend(JobBackend):
    name = "remote"
    remote = True

    def __init__(
        self,
        session: LinkSession,
        client: LinkClient | None = None,
        backend_name: str = config.JOB_BACKEND_NAME,
        poll_interval: float = config.JOB_POLL_INTERVAL_SEC,
    ):
        self.session = session
        self.client = client or session.client
        self.backend_name = backend_name
        self.poll_interval = poll_interval

    async def run(self) -> BitRegister:
        session_id = self.session.session_id
        if not session_id:
            raise JobPipelineInterrupted("No session id for remote job")

        job_id = await self.client.submit_job(session_id, build_program(), self.backend_name)
        while True:
            job = await self.client.get_job(session_id, job_id)
            status = str(job.get("status", "")).upper()
            if status == "COMPLETED":
                break
            if status in FAILED_JOB_STATES:
                raise JobPipelineInterrupted(f"Job {job_id} ended {status}")
            log.debug("Job %s is %s, polling again in %.1fs", job_id, status or "?", self.poll_interval)
            await asyncio.sleep(self.poll_interval)

        bitstring = extract_bitstring(job)
        if bitstring is None:
            raise JobPipelineInterrupted(f"Job {job_id} completed without a result")
        try:
            return BitRegister.from_string(bitstring[-config.BIT_COUNT:].zfill(config.BIT_COUNT))
        except ValueError as e:
            raise JobPipelineInterrupted(f"Job {job_id} returned an unusable result", detail=bitstring[: config.MAX_DIAGNOSTIC_CHARS]) from e
