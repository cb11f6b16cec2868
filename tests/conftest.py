"""
conftest.py
-----------
EazyScripts Python Client — Shared Test Fixtures
------------------------------------------------
All HTTP is simulated with ``httpx.MockTransport``; no test touches the
network.  ``Recorder`` captures every outbound ``httpx.Request`` and
answers with a canned response (or raises a canned transport error).

Project: EazyScripts Python Client
"""

import json
import os
import sys
from typing import Any, List, Optional

import httpx
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eazyscripts import Credentials, EazyScriptsClient  # noqa: E402


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(
        self,
        status: int = 200,
        body: Any = None,
        content: Optional[bytes] = None,
        error: Optional[type] = None,
    ) -> None:
        self.status = status
        self.body = {} if body is None and content is None else body
        self.content = content
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("Connection refused", request=request)
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(key="K", secret="S", subdomain="demo")


@pytest.fixture
def client(recorder):
    """Client wired to *recorder*, with a session token already set."""
    api = EazyScriptsClient("K", "S", "demo", transport=httpx.MockTransport(recorder))
    api.set_token("tok-123")
    yield api
    api.close()
