"""Shared fixtures: a WEX client wired to an in-process fake server."""

from __future__ import annotations

import httpx
import pytest

from wexapi import Client, NonceGenerator

INVALID_METHOD_RESPONSE = '{"success":0, "error":"Invalid method"}'


class FakeServer:
    """Records requests and answers each with a fixed status and body."""

    def __init__(self, body: str = "", status: int = 200, exc: Exception | None = None):
        self.body = body
        self.status = status
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status, content=self.body.encode())


@pytest.fixture
def make_client():
    clients = []

    def _make(server: FakeServer, key: str = "", secret: str = "", nonce_start: int = 1) -> Client:
        http = httpx.Client(transport=httpx.MockTransport(server))
        clients.append(http)
        return Client(key, secret, http_client=http, nonce=NonceGenerator(start=nonce_start))

    yield _make
    for http in clients:
        http.close()
