"""
Pytest configuration and fixtures for the Paddle SDK tests.

HTTP is mocked with httpx.MockTransport injected through the client's
`http_client` argument; every request the client sends is recorded.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qsl

import httpx
import pytest

from paddle_sdk import PaddleClient

API_KEY = "test_api_key"
VENDOR_ID = "test_vendor_id"


def form_of(request: httpx.Request) -> Dict[str, str]:
    """Decode a form-encoded request body."""
    return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))


def query_of(request: httpx.Request) -> Dict[str, str]:
    return dict(request.url.params)


class RecordingHandler:
    """Returns a canned response and keeps every request it saw."""

    def __init__(self, *, json: Any = None, status_code: int = 200, content: Optional[bytes] = None):
        self.json = json
        self.status_code = status_code
        self.content = content
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., PaddleClient]:
    """Build a PaddleClient whose HTTP traffic goes to `handler`."""

    def _make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> PaddleClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return PaddleClient(API_KEY, VENDOR_ID, http_client=http, **kwargs)

    return _make


@pytest.fixture
def respond(make_client):
    """
    Shortcut: respond(json=..., status_code=...) -> (client, handler).
    """

    def _respond(**kwargs: Any):
        handler = RecordingHandler(**kwargs)
        return make_client(handler), handler

    return _respond
