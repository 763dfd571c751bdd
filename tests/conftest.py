"""Shared pytest configuration and fixtures for the Nexus Link test suite."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from features.events import EventLog  # noqa: E402
from features.jobs.backends import LocalBackend  # noqa: E402
from features.link import LinkClient, LinkSession  # noqa: E402

SESSION_ID = "sess-0123456789abcdef"
GOOD_TOKEN = "good-token"


def auth_handler(request: httpx.Request) -> httpx.Response:
    """Fake auth endpoint: accepts GOOD_TOKEN, rejects everything else."""
    body = json.loads(request.content)
    if body.get("apiToken") == GOOD_TOKEN:
        return httpx.Response(200, json={"id": SESSION_ID, "ttl": 1209600})
    return httpx.Response(401, text="Login failed: token not recognised by the server, please retry")


def unreachable_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


def make_client(handler=auth_handler) -> LinkClient:
    return LinkClient(
        auth_url="https://auth.test/login",
        job_api_url="https://jobs.test/api",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def events():
    return EventLog()


@pytest.fixture
def client():
    return make_client()


@pytest.fixture
def session(events, client):
    return LinkSession(events, client)


@pytest.fixture
def fast_local():
    return LocalBackend(delay=0)
