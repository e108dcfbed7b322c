"""Shared fixtures for gateway route tests.

Builds the app with explicit Settings and an httpx.MockTransport standing in
for Alpha Vantage, so route tests never hit the real provider.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from Stock_Pulse.config import Settings
from Stock_Pulse.web.app import create_app

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


class FakeProvider:
    """Records upstream requests and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.response: httpx.Response = httpx.Response(200, json={})
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    def respond(self, status_code: int = 200, **kwargs: Any) -> None:
        self.response = httpx.Response(status_code, **kwargs)


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        alpha_vantage_api_key="test-key",
        alpha_vantage_base_url="https://provider.test/query",
    )


@pytest.fixture()
def app(settings: Settings, provider: FakeProvider) -> FastAPI:
    return create_app(settings, upstream_transport=httpx.MockTransport(provider))


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    """Synchronous test client for the app."""
    return TestClient(app, raise_server_exceptions=False)
