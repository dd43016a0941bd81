# apicheck/runner.py
"""
Test Runner — executes declarative API tests one at a time.

Flow per test: build request → send → assert response → RunResult.
Every failure is captured in that test's RunResult; a batch always returns
one result per input test, in input order.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, List, Optional

import httpx

from apicheck.api_types import (
    APICheckError,
    BodyReadError,
    RequestBuildError,
    RunResult,
    TestCase,
    TransportError,
    UnexpectedRunError,
)
from apicheck.config import Settings, get_settings
from apicheck.request_builder import build_request
from apicheck.response_asserter import assert_response

logger = logging.getLogger(__name__)


class APITestRunner:
    """
    Sequential runner holding a single reusable httpx.Client.

    Usable as a context manager; close() releases the client's connections.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.client = httpx.Client(
            timeout=self.settings.timeout_sec,
            verify=self.settings.verify_ssl,
            follow_redirects=self.settings.follow_redirects,
            transport=transport,
        )

    # ==================== Public API ====================

    def run_test(self, test: TestCase) -> RunResult:
        """Run one test and return its result; never raises for per-test failures"""
        logger.info(f"🧪 Running API test: {test.display_name}")
        start = time.perf_counter()
        try:
            return self._run_test(test)
        except Exception as e:
            error = UnexpectedRunError(e)
            logger.exception(f"❌ {test.display_name}: API test failed - {e}")
            return self._failed(test, error, self._elapsed_ms(start))

    def run_tests(self, tests: Iterable[TestCase]) -> List[RunResult]:
        """Run tests sequentially, preserving input order"""
        return [self.run_test(test) for test in tests]

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "APITestRunner":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ==================== Internals ====================

    def _run_test(self, test: TestCase) -> RunResult:
        try:
            request = build_request(test)
        except RequestBuildError as e:
            logger.error(f"❌ {test.display_name}: {e}")
            return self._failed(test, e)

        if self.settings.user_agent and "user-agent" not in request.headers:
            request.headers["User-Agent"] = self.settings.user_agent

        start = time.perf_counter()
        try:
            response = self.client.send(request, stream=True)
        except httpx.RequestError as e:
            error = TransportError(str(request.url), e)
            logger.error(f"🔌 {test.display_name}: {error}")
            return self._failed(test, error, self._elapsed_ms(start))

        try:
            success, failure = assert_response(response, test.response)
        except BodyReadError as e:
            logger.error(f"❌ {test.display_name}: {e}")
            return self._failed(test, e, self._elapsed_ms(start))
        finally:
            response.close()

        elapsed_ms = self._elapsed_ms(start)
        if success:
            logger.info(f"✅ {test.display_name}: {request.method} {request.url} → {response.status_code} ({elapsed_ms}ms)")
            return RunResult(test=test, success=True, elapsed_ms=elapsed_ms)

        logger.warning(f"❌ {test.display_name}: {failure.check.value} check failed")
        return self._failed(test, failure, elapsed_ms)

    @staticmethod
    def _failed(test: TestCase, error: APICheckError, elapsed_ms: Optional[int] = None) -> RunResult:
        return RunResult(test=test, success=False, error=error, message=str(error), elapsed_ms=elapsed_ms)

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)


def run_test(test: TestCase, settings: Optional[Settings] = None) -> RunResult:
    with APITestRunner(settings) as runner:
        return runner.run_test(test)


def run_tests(tests: Iterable[TestCase], settings: Optional[Settings] = None) -> List[RunResult]:
    with APITestRunner(settings) as runner:
        return runner.run_tests(tests)
