"""Tests for the REST submit/poll remote backend."""

import json

import httpx
import pytest

from features.events import EventLog
from features.jobs.backends import RemoteBackend, build_program
from features.link import LinkClient, LinkSession
from features.link.client import extract_bitstring
from features.link.errors import JobPipelineInterrupted
from tests.conftest import GOOD_TOKEN, SESSION_ID, auth_handler



def job_api(statuses, final):
    """Build a handler that serves auth, one submission, then a sequence of polls."""
    polls = iter(statuses)
    seen = {"submitted": None, "polls": 0, "tokens": set()}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "auth.test":
            return auth_handler(request)
        seen["tokens"].add(request.headers.get("x-access-token"))
        if request.method == "POST" and request.url.path == "/api/Jobs":
            seen["submitted"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "job-42", "status": "QUEUED"})
        if request.method == "GET" and request.url.path == "/api/Jobs/job-42":
            seen["polls"] += 1
            status = next(polls)
            body = {"id": "job-42", "status": status}
            if status == "COMPLETED":
                body.update(final)
            return httpx.Response(200, json=body)
        return httpx.Response(404, text="not found")

    return handler, seen


async def ready_backend(handler):
    client = LinkClient(
        auth_url="https://auth.test/login",
        job_api_url="https://jobs.test/api",
        transport=httpx.MockTransport(handler),
    )
    session = LinkSession(EventLog(), client)
    await session.authenticate(GOOD_TOKEN)
    return RemoteBackend(session, backend_name="sim", poll_interval=0)


@pytest.mark.asyncio
async def test_submit_and_poll():
    handler, seen = job_api(["QUEUED", "RUNNING", "COMPLETED"], {"bitstring": "1010101010"})
    backend = await ready_backend(handler)
    reg = await backend.run()
    assert str(reg) == "1010101010"
    assert seen["polls"] == 3
    assert seen["tokens"] == {SESSION_ID}
    assert seen["submitted"]["backend"] == {"name": "sim"}
    assert "measure q -> c;" in seen["submitted"]["qasms"][0]["qasm"]


@pytest.mark.asyncio
async def test_counts_histogram():
    handler, _ = job_api(["COMPLETED"], {"qasms": [{"result": {"data": {"counts": {"0x3": 1}}}}]})
    backend = await ready_backend(handler)
    reg = await backend.run()
    assert str(reg) == "0000000011"


@pytest.mark.asyncio
async def test_failed_job():
    handler, _ = job_api(["RUNNING", "ERROR_RUNNING_JOB"], {})
    backend = await ready_backend(handler)
    with pytest.raises(JobPipelineInterrupted):
        await backend.run()


@pytest.mark.asyncio
async def test_completed_without_result():
    handler, _ = job_api(["COMPLETED"], {})
    backend = await ready_backend(handler)
    with pytest.raises(JobPipelineInterrupted):
        await backend.run()


@pytest.mark.asyncio
async def test_job_api_error_status():
    def handler(request):
        if request.url.host == "auth.test":
            return auth_handler(request)
        return httpx.Response(503, text="maintenance")

    backend = await ready_backend(handler)
    with pytest.raises(JobPipelineInterrupted) as exc_info:
        await backend.run()
    assert exc_info.value.detail == "maintenance"


@pytest.mark.asyncio
async def test_no_session():
    backend = RemoteBackend(LinkSession(EventLog(), LinkClient()), poll_interval=0)
    with pytest.raises(JobPipelineInterrupted):
        await backend.run()


def test_build_program():
    program = build_program(3)
    assert program.startswith("OPENQASM 2.0;")
    assert "qreg q[3];" in program
    assert program.count("h q[") == 3


@pytest.mark.parametrize("job,expected", [
    ({"bitstring": "0101"}, "0101"),
    ({"counts": {"0110": 3, "1001": 7}}, "1001"),
    ({"counts": {"0x1": 1}}, "0000000001"),
    ({}, None),
])
def test_extract_bitstring(job, expected):
    assert extract_bitstring(job) == expected
