# apicheck/request_builder.py
"""
Turns a TestCase into an httpx.Request.

Pure data transformation: nothing in here touches the network.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Optional

import httpx

from apicheck.api_types import RequestBuildError, TestCase

logger = logging.getLogger(__name__)

# RFC 7230 token characters
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


# ==================== URL ====================

def build_query_string(query: Optional[Mapping[str, str]]) -> str:
    """
    Build "?k1=v1&k2=v2" from a mapping, in the mapping's iteration order.

    Keys and values are emitted as-is, without percent-encoding.
    """
    if not query:
        return ""
    return "?" + "&".join(f"{key}={value}" for key, value in query.items())


def build_url(hostname: str, endpoint: str, query: Optional[Mapping[str, str]] = None) -> str:
    return hostname + endpoint + build_query_string(query)


# ==================== Body ====================

def _has_json_payload(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (dict, list)) and len(value) == 0:
        return False
    return True


def encode_json(value: Any) -> str:
    """Canonical JSON text: sorted keys, compact separators, no NaN/Infinity"""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _select_body(test: TestCase) -> bytes:
    payload = test.request.json
    if _has_json_payload(payload):
        try:
            text = encode_json(payload)
        except (TypeError, ValueError) as e:
            raise RequestBuildError(f"Could not encode request JSON: {e}", e) from e
        return text.encode("utf-8")
    return (test.request.body or "").encode("utf-8")


# ==================== Request ====================

def build_request(test: TestCase) -> httpx.Request:
    """
    Build the request described by a test case.

    Args:
        test: Test definition

    Returns:
        An unsent httpx.Request

    Raises:
        RequestBuildError: If the JSON payload cannot be encoded or the
            method/URL are not valid
    """
    url = build_url(test.hostname, test.endpoint, test.request.query_params)
    method = (test.method or "GET").strip() or "GET"

    if not _METHOD_RE.match(method):
        raise RequestBuildError(f"Invalid HTTP method: {method!r}")

    content = _select_body(test)

    try:
        request = httpx.Request(method, url, content=content)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise RequestBuildError(f"Could not build request for {url!r}: {e}", e) from e

    if not request.url.scheme or not request.url.host:
        raise RequestBuildError(f"URL must be absolute (scheme and host): {url!r}")

    for key, value in (test.request.headers or {}).items():
        try:
            request.headers[key] = value
        except (TypeError, ValueError) as e:
            raise RequestBuildError(f"Invalid header {key!r}: {e}", e) from e

    logger.debug(f"Built request {request.method} {request.url}")
    return request
