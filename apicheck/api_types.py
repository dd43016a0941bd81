# apicheck/api_types.py
"""
Core data model and error taxonomy for declarative API tests.

A TestCase describes one request and the response it should produce.
RunResult is the outcome of executing it. Everything here is read-only once
constructed; the runner creates a fresh RunResult per execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


# ==================== Enums ====================

class RunStatus(str, Enum):
    """Outcome category of a single test run"""
    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


class CheckKind(str, Enum):
    """Which response check produced an assertion failure"""
    STATUS = "status"
    BODY = "body"
    JSON = "json"
    HEADER = "header"


# ==================== Test Definitions ====================

@dataclass(frozen=True)
class RequestSpec:
    """What to send"""
    query_params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    json: Any = None


@dataclass(frozen=True)
class ResponseSpec:
    """What the server is expected to answer"""
    status_code: int = 200
    body: Optional[str] = None
    json: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TestCase:
    """One declarative HTTP test: request plus expected response"""
    __test__ = False  # not a pytest class

    hostname: str
    endpoint: str
    method: str = "GET"
    request: RequestSpec = field(default_factory=RequestSpec)
    response: ResponseSpec = field(default_factory=ResponseSpec)
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or f"{self.method.upper() or 'GET'} {self.hostname}{self.endpoint}"


# ==================== Exceptions ====================

class APICheckError(Exception):
    """Base exception for API check errors."""
    pass


class RequestBuildError(APICheckError):
    """Raised when a test definition cannot be turned into an HTTP request."""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)


class TransportError(APICheckError):
    """Raised when the request never got a response (connect, DNS, timeout...)."""
    def __init__(self, url: str, original_error: Exception):
        self.url = url
        self.original_error = original_error
        super().__init__(f"Request to {url} failed: {original_error!r}")


class BodyReadError(APICheckError):
    """Raised when the response body could not be read."""
    def __init__(self, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"Failed reading response body: {original_error!r}")


class AssertionFailure(APICheckError):
    """A response arrived but did not match the expectation."""
    def __init__(self, check: CheckKind, message: str, expected: Any = None, actual: Any = None):
        self.check = check
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class UnexpectedRunError(APICheckError):
    """Raised for any other failure while running a single test."""
    def __init__(self, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"Unexpected error ({type(original_error).__name__}): {original_error}")


class TestDefinitionError(APICheckError):
    """Raised by the loader for unreadable or malformed test definitions."""
    __test__ = False


# ==================== Results ====================

@dataclass(frozen=True)
class RunResult:
    """Outcome of running one TestCase"""
    test: TestCase
    success: bool
    error: Optional[APICheckError] = None
    message: Optional[str] = None
    elapsed_ms: Optional[int] = None

    @property
    def status(self) -> RunStatus:
        if self.success:
            return RunStatus.PASS
        if isinstance(self.error, AssertionFailure):
            return RunStatus.FAIL
        return RunStatus.ERROR
