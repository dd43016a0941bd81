# apicheck/response_asserter.py
"""
Response assertions.

Checks run in a fixed order and stop at the first failure:
status code, literal body, JSON body, headers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Tuple

import httpx

from apicheck.api_types import AssertionFailure, BodyReadError, CheckKind, ResponseSpec
from apicheck.json_matcher import assert_json, json_diff

logger = logging.getLogger(__name__)

_MAX_DIFF_LINES = 20


def _mismatch_message(title: str, expected: Any, actual: Any) -> str:
    return f"{title}\n\nExpected:\n{expected}\n\nActual:\n{actual}\n\n"


def read_body(response: httpx.Response) -> str:
    """Read the whole body and return it as text"""
    try:
        response.read()
    except (httpx.StreamError, httpx.TransportError, httpx.DecodingError) as e:
        raise BodyReadError(e) from e
    return response.text


# ==================== Individual Checks ====================

def check_status(response: httpx.Response, expected: ResponseSpec) -> Optional[AssertionFailure]:
    if expected.status_code != response.status_code:
        return AssertionFailure(
            CheckKind.STATUS,
            _mismatch_message("Unexpected status code received", expected.status_code, response.status_code),
            expected=expected.status_code,
            actual=response.status_code,
        )
    return None


def check_body(body: str, expected: ResponseSpec) -> Optional[AssertionFailure]:
    # An empty expected body means "not checked"; there is no way to assert an empty body.
    if expected.body and expected.body != body:
        return AssertionFailure(
            CheckKind.BODY,
            _mismatch_message("Mismatching bodies", expected.body, body),
            expected=expected.body,
            actual=body,
        )
    return None


def check_json(body: str, expected: ResponseSpec) -> Optional[AssertionFailure]:
    if not body:
        return None

    actual: Any = {}
    parse_error: Optional[str] = None
    try:
        actual = json.loads(body)
        if not isinstance(actual, dict):
            parse_error = f"expected a JSON object, got {type(actual).__name__}"
            actual = {}
    except (ValueError, RecursionError) as e:
        parse_error = str(e)

    if parse_error is not None and expected.json is not None:
        return AssertionFailure(
            CheckKind.JSON,
            f"Response body did not contain JSON or contained invalid JSON: {parse_error}",
            expected=expected.json,
            actual=body,
        )

    if not assert_json(actual, expected.json):
        diffs = json_diff(actual, expected.json)
        lines = diffs[:_MAX_DIFF_LINES]
        if len(diffs) > _MAX_DIFF_LINES:
            lines.append(f"... {len(diffs) - _MAX_DIFF_LINES} more")
        detail = "\n".join(f"  {line}" for line in lines)
        return AssertionFailure(
            CheckKind.JSON,
            "Mismatching JSON" + (f"\n\n{detail}\n" if detail else ""),
            expected=expected.json,
            actual=actual,
        )
    return None


def check_headers(response: httpx.Response, expected: ResponseSpec) -> Optional[AssertionFailure]:
    for key, value in (expected.headers or {}).items():
        actual = response.headers.get(key)
        if actual is None or actual != value:
            shown = actual if actual is not None else "(header not present)"
            return AssertionFailure(
                CheckKind.HEADER,
                _mismatch_message(f"Mismatching {key} header", value, shown),
                expected=value,
                actual=actual,
            )
    return None


# ==================== Entry Point ====================

def assert_response(response: httpx.Response, expected: ResponseSpec) -> Tuple[bool, Optional[AssertionFailure]]:
    """
    Compare a received response with its expectation.

    Args:
        response: Response whose body may still be unread
        expected: Expected status, body, JSON and headers

    Returns:
        (True, None) when everything matches, otherwise (False, failure)
        for the first check that failed

    Raises:
        BodyReadError: If the body cannot be read
    """
    body = read_body(response)

    failure = (
        check_status(response, expected)
        or check_body(body, expected)
        or check_json(body, expected)
        or check_headers(response, expected)
    )
    if failure is not None:
        logger.debug(f"{failure.check.value} check failed (status {response.status_code})")
        return False, failure
    return True, None
