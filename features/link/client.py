"""
REST client for the external compute backend.

Covers the two exchanges the link needs:
  POST {AUTH_URL}                  — trade an API token for a session id
  POST {JOB_API_URL}/Jobs          — submit a circuit
  GET  {JOB_API_URL}/Jobs/{job_id} — poll for completion

Transport failures and timeouts surface as LinkUnreachable; a response
the backend actually sent but refused surfaces as CredentialRejected
(auth) or JobPipelineInterrupted (jobs).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

import config
from features.link.errors import CredentialRejected, JobPipelineInterrupted, LinkUnreachable

log = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

FAILED_JOB_STATES = {"ERROR", "ERROR_RUNNING_JOB", "ERROR_VALIDATING_JOB", "FAILED", "CANCELLED"}


class LinkClient:
    """Thin async wrapper over httpx for the backend's REST API."""

    def __init__(
        self,
        auth_url: str = config.AUTH_URL,
        job_api_url: str = config.JOB_API_URL,
        timeout: float = config.LINK_TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.auth_url = auth_url
        self.job_api_url = job_api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=JSON_HEADERS,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def login(self, credential: str) -> str:
        """Exchange an API token for an opaque session id."""
        try:
            async with self._client() as client:
                resp = await client.post(self.auth_url, json={"apiToken": credential})
        except httpx.HTTPError as e:
            log.warning("Auth request failed: %s", e.__class__.__name__)
            raise LinkUnreachable("Link blocked (network)", detail=e.__class__.__name__) from e

        if not resp.is_success:
            raise CredentialRejected(
                f"Token rejected [{resp.status_code}]",
                detail=resp.text[: config.MAX_DIAGNOSTIC_CHARS],
                status_code=resp.status_code,
            )

        try:
            session_id = resp.json()["id"]
        except (ValueError, KeyError, TypeError):
            raise CredentialRejected(
                f"Malformed auth response [{resp.status_code}]",
                detail=resp.text[: config.MAX_DIAGNOSTIC_CHARS],
                status_code=resp.status_code,
            )
        if not session_id:
            raise CredentialRejected("Empty session id", status_code=resp.status_code)
        return str(session_id)

    async def submit_job(self, session_id: str, program: str, backend: str, shots: int = 1) -> str:
        """Submit a QASM program and return the backend's job id."""
        payload = {
            "backend": {"name": backend},
            "qasms": [{"qasm": program}],
            "shots": shots,
        }
        data = await self._job_request("POST", "/Jobs", session_id, json=payload)
        job_id = data.get("id")
        if not job_id:
            raise JobPipelineInterrupted("Submission returned no job id")
        log.info("Submitted job %s to %s", job_id, backend)
        return str(job_id)

    async def get_job(self, session_id: str, job_id: str) -> dict:
        return await self._job_request("GET", f"/Jobs/{job_id}", session_id)

    async def _job_request(self, method: str, path: str, session_id: str, **kwargs: Any) -> dict:
        try:
            async with self._client() as client:
                resp = await client.request(
                    method,
                    f"{self.job_api_url}{path}",
                    headers={"X-Access-Token": session_id},
                    **kwargs,
                )
        except httpx.HTTPError as e:
            raise JobPipelineInterrupted("Job API unreachable", detail=e.__class__.__name__) from e

        if not resp.is_success:
            raise JobPipelineInterrupted(
                f"Job API error [{resp.status_code}]",
                detail=resp.text[: config.MAX_DIAGNOSTIC_CHARS],
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise JobPipelineInterrupted("Job API returned non-JSON body") from e
        if not isinstance(data, dict):
            raise JobPipelineInterrupted("Job API returned unexpected payload")
        return data


def extract_bitstring(job: dict, width: int = config.BIT_COUNT) -> str | None:
    """Pull the measured bitstring out of a completed job payload.

    Accepts either a top-level ``bitstring`` or a ``counts`` histogram
    (binary or ``0x`` hex keys), taking the most frequent outcome.
    """
    if job.get("bitstring"):
        return str(job["bitstring"])

    counts = job.get("counts")
    if counts is None:
        for q in job.get("qasms", []):
            counts = (q.get("result") or {}).get("data", {}).get("counts")
            if counts:
                break
    if not counts:
        return None

    outcome = max(counts, key=counts.get)
    if outcome.startswith("0x"):
        return format(int(outcome, 16), f"0{width}b")
    return outcome.replace(" ", "")
