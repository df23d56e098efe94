"""
pytest configuration for farmassist tests.

Upstream providers are replaced by an httpx.MockTransport; settings are
injected through FastAPI dependency overrides so no real keys or network
access are needed.
"""

from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from farmassist.config import Settings, get_settings
from farmassist.main import create_app
from farmassist.services import get_http_client


class FakeUpstream:
    """Records outbound requests and answers with a configurable handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def respond_with(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        weather_api_key="test-weather-key",
        disease_api_key="test-disease-key",
        frontend_dir=tmp_path / "no-frontend",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_client(upstream):
    """Factory: build a TestClient around an app using the given settings."""
    opened: List[TestClient] = []

    def _make(settings: Settings) -> TestClient:
        app = create_app(settings)

        async def _http_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as c:
                yield c

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = _http_client
        client = TestClient(app)
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)
