"""
Shared test fixtures and configuration for the graphql_http test suite.
"""

import re
from typing import Any, Dict, List, Optional

import pytest
from pydantic import BaseModel

ENDPOINT = "https://api.example.com/graphql"
GET_PATTERN = re.compile(r"^https://api\.example\.com/graphql\?.*$")

HERO_BODY = '{"data":{"hero":{"name":"R2-D2"}}}'
ERROR_BODY = '{"errors":[{"message":"Cannot query field \\"x\\""}]}'


class Hero(BaseModel):
    """Typed shape of the hero field used across tests."""

    name: str


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int, body: str, url: str) -> None:
        self.status = status
        self.reason = "Fake"
        self.url = url
        self.headers: Dict[str, str] = {"Content-Type": "application/json"}
        self._body = body
        self.released = False

    async def text(self, errors: str = "strict") -> str:
        return self._body


class _FakeRequestContext:
    def __init__(self, response: FakeResponse) -> None:
        self._response = response

    async def __aenter__(self) -> FakeResponse:
        return self._response

    async def __aexit__(self, *exc_info: Any) -> None:
        self._response.released = True


class FakeSession:
    """Session recording calls and handing out FakeResponse objects."""

    def __init__(self, status: int = 200, body: str = HERO_BODY) -> None:
        self.status = status
        self.body = body
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[FakeResponse] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeRequestContext:
        self.calls.append({"method": method, "url": url, **kwargs})
        response = FakeResponse(self.status, self.body, url)
        self.responses.append(response)
        return _FakeRequestContext(response)

    async def close(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> Optional[Dict[str, Any]]:
        return self.calls[-1] if self.calls else None


@pytest.fixture
def fake_session() -> FakeSession:
    """Session returning the hero body with status 200."""
    return FakeSession()
