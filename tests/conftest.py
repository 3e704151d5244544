"""Shared fixtures: a fake Coralogix API served through httpx.MockTransport."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from coralogix_mcp.config import create_coralogix_config

EMPTY = object()


class FakeCoralogix:
    """Answers requests from a (method, path) route table and records them."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = EMPTY, status: int = 200):
        """Serve ``body`` as JSON (EMPTY for no body)."""
        def respond(request: httpx.Request) -> httpx.Response:
            if body is EMPTY:
                return httpx.Response(status)
            return httpx.Response(
                status,
                content=json.dumps(body).encode(),
                headers={"Content-Type": "application/json"},
            )
        self.routes[(method, path)] = respond

    def fail(self, method: str, path: str, exc: Exception):
        """Raise a transport error for the route."""
        def respond(request: httpx.Request) -> httpx.Response:
            raise exc
        self.routes[(method, path)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        return route(request)

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def last_body(self, path: str) -> Optional[Dict[str, Any]]:
        calls = self.calls(path)
        return json.loads(calls[-1].content) if calls else None


@pytest.fixture
def fake():
    return FakeCoralogix()


@pytest.fixture
def config(fake):
    return create_coralogix_config(
        api_key="test-api-key",
        region="EUROPE",
        transport=httpx.MockTransport(fake.handler),
    )
