"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build an isolated provider per test (no process-wide state).
- Stub the upstream HTTP service with `httpx.MockTransport`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import pytest

from fetchstate.bootstrap import build_provider
from fetchstate.factory import QueryFactory
from fetchstate.registry import ServiceProvider
from fetchstate.settings import Settings

UPSTREAM = "http://fetchstate-tests.example"


@dataclass
class TestData:
    __test__ = False  # not a test class despite the name

    result: str | None = None


def _upstream(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/":
        return httpx.Response(200, text="Testing is cool!")
    if request.url.path.startswith("/greetings/"):
        name = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200, json={"text": f"hello {name}"})
    return httpx.Response(404, text="not found")


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", http_base_url=UPSTREAM)


@pytest.fixture
def provider(settings: Settings) -> ServiceProvider:
    return build_provider(settings, http_transport=httpx.MockTransport(_upstream))


@pytest.fixture
def factory(provider: ServiceProvider) -> QueryFactory:
    return QueryFactory(provider)


# --- Module Notes -----------------------------------------------------------
# Each test gets its own provider, so cache contents never leak between tests.
