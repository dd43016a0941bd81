"""apicheck — declarative HTTP API testing"""
from .api_types import (
    APICheckError,
    AssertionFailure,
    BodyReadError,
    CheckKind,
    RequestBuildError,
    RequestSpec,
    ResponseSpec,
    RunResult,
    RunStatus,
    TestCase,
    TestDefinitionError,
    TransportError,
    UnexpectedRunError,
)
from .json_matcher import assert_json
from .request_builder import build_request, build_url
from .response_asserter import assert_response
from .runner import APITestRunner, run_test, run_tests

__all__ = [
    "APICheckError",
    "AssertionFailure",
    "BodyReadError",
    "CheckKind",
    "RequestBuildError",
    "RequestSpec",
    "ResponseSpec",
    "RunResult",
    "RunStatus",
    "TestCase",
    "TestDefinitionError",
    "TransportError",
    "UnexpectedRunError",
    "assert_json",
    "build_request",
    "build_url",
    "assert_response",
    "APITestRunner",
    "run_test",
    "run_tests",
]
