"""
tests.conftest

Shared fixtures for the Orderdesk test suite.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from starlette.requests import Request
from starlette.types import ASGIApp

from orderdesk.auth.jwt import JwtConfig
from orderdesk.auth.models import Principal
from orderdesk.settings import Settings


class StubResolver:
    """
    Identity resolver returning a fixed identity and counting lookups.
    """

    def __init__(self, identity: Principal | None) -> None:
        self.identity = identity
        self.calls = 0

    async def resolve(self, request: Request) -> Principal | None:
        self.calls += 1
        return self.identity


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test")


@pytest.fixture
def jwt_cfg(settings: Settings) -> JwtConfig:
    return JwtConfig.from_settings(settings)


@pytest.fixture
def admin() -> Principal:
    return Principal(subject="admin@example.com", roles=frozenset({"admin"}))


@pytest.fixture
def staff() -> Principal:
    return Principal(subject="staff@example.com", roles=frozenset({"staff"}))


@pytest.fixture
def stub_resolver() -> Callable[[Principal | None], StubResolver]:
    return StubResolver


@pytest.fixture
def client_for() -> Callable[[ASGIApp], httpx.AsyncClient]:
    def _client(app: ASGIApp) -> httpx.AsyncClient:
        transport = httpx.ASGITransport(app=app)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    return _client
