"""
Pytest configuration and shared fixtures for apicheck tests.
"""

from typing import Callable, List

import httpx
import pytest

from apicheck.api_types import RequestSpec, ResponseSpec, TestCase
from apicheck.config import Settings
from apicheck.runner import APITestRunner

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_test() -> Callable[..., TestCase]:
    """Factory for TestCase objects with sensible defaults."""

    def _make(
        endpoint: str = "/users/1",
        method: str = "GET",
        hostname: str = "http://api.test",
        request: RequestSpec = None,
        response: ResponseSpec = None,
        name: str = None,
    ) -> TestCase:
        return TestCase(
            hostname=hostname,
            endpoint=endpoint,
            method=method,
            request=request or RequestSpec(),
            response=response or ResponseSpec(status_code=200),
            name=name,
        )

    return _make


@pytest.fixture
def make_runner(settings) -> Callable[[Handler], APITestRunner]:
    """Build a runner whose client talks to an in-process mock transport."""
    runners: List[APITestRunner] = []

    def _make(handler: Handler) -> APITestRunner:
        runner = APITestRunner(settings, transport=httpx.MockTransport(handler))
        runners.append(runner)
        return runner

    yield _make

    for runner in runners:
        runner.close()


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Collects requests seen by a mock handler."""
    return []
