# apicheck/loader.py
"""
Test definition loader.

Reads JSON or YAML documents describing API tests. A document is either a
list of tests or a mapping:

    hostname: http://localhost:8080     # default for tests without one
    tests:
      - name: get user
        endpoint: /users/1
        method: GET
        request:
          queryParams: {verbose: "true"}
          headers: {Accept: application/json}
        response:
          statusCode: 200
          json: {id: 1}
          headers: {Content-Type: application/json}

Keys may be camelCase or snake_case.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from apicheck.api_types import RequestSpec, ResponseSpec, TestCase, TestDefinitionError

logger = logging.getLogger(__name__)


class _JSONSafeLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates and timestamps as plain strings"""


_JSONSafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in data:
            return data[k]
    return default


def _string_map(value: Any, what: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TestDefinitionError(f"{what} must be a mapping, got {type(value).__name__}")
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


def _parse_request(data: Any) -> RequestSpec:
    if data is None:
        return RequestSpec()
    if not isinstance(data, dict):
        raise TestDefinitionError("request must be a mapping")
    return RequestSpec(
        query_params=_string_map(_pick(data, "queryParams", "query_params", "params"), "request.queryParams"),
        headers=_string_map(data.get("headers"), "request.headers"),
        body=str(_pick(data, "body", default="") or ""),
        json=data.get("json"),
    )


def _parse_response(data: Any) -> ResponseSpec:
    if data is None:
        return ResponseSpec()
    if not isinstance(data, dict):
        raise TestDefinitionError("response must be a mapping")

    status = _pick(data, "statusCode", "status_code", "status", default=200)
    try:
        status = int(status)
    except (TypeError, ValueError) as e:
        raise TestDefinitionError(f"response.statusCode must be an integer, got {status!r}") from e

    body = data.get("body")
    return ResponseSpec(
        status_code=status,
        body=None if body is None else str(body),
        json=data.get("json"),
        headers=_string_map(data.get("headers"), "response.headers"),
    )


def parse_test(data: Any, defaults: Optional[Dict[str, Any]] = None) -> TestCase:
    """Parse a single test mapping"""
    if not isinstance(data, dict):
        raise TestDefinitionError(f"test must be a mapping, got {type(data).__name__}")
    defaults = defaults or {}

    hostname = data.get("hostname") or defaults.get("hostname")
    if not hostname:
        raise TestDefinitionError("test has no hostname and no suite-level default")

    return TestCase(
        hostname=str(hostname),
        endpoint=str(_pick(data, "endpoint", "path", default="") or ""),
        method=str(data.get("method") or "GET").upper(),
        request=_parse_request(data.get("request")),
        response=_parse_response(data.get("response")),
        name=data.get("name"),
    )


def parse_tests(document: Any, hostname: Optional[str] = None) -> List[TestCase]:
    """
    Parse a whole definition document.

    Args:
        document: List of tests, or mapping with "tests" and optional "hostname"
        hostname: Default hostname; overrides the document's suite-level one

    Raises:
        TestDefinitionError: If any entry is malformed (names the entry index)
    """
    defaults: Dict[str, Any] = {}
    if isinstance(document, dict):
        if "tests" not in document:
            raise TestDefinitionError("document mapping has no 'tests' key")
        if document.get("hostname"):
            defaults["hostname"] = document["hostname"]
        entries = document["tests"]
    else:
        entries = document

    if hostname:
        defaults["hostname"] = hostname
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise TestDefinitionError("'tests' must be a list")

    tests: List[TestCase] = []
    for idx, entry in enumerate(entries):
        try:
            tests.append(parse_test(entry, defaults))
        except TestDefinitionError as e:
            label = entry.get("name") if isinstance(entry, dict) and entry.get("name") else f"#{idx}"
            raise TestDefinitionError(f"test {label}: {e}") from e
    return tests


def load_tests(path: Union[str, Path], hostname: Optional[str] = None) -> List[TestCase]:
    """Load tests from a .json, .yaml or .yml file"""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            if p.suffix.lower() in (".yaml", ".yml"):
                document = yaml.load(f, Loader=_JSONSafeLoader)
            else:
                document = json.load(f)
    except OSError as e:
        raise TestDefinitionError(f"{p}: cannot read file: {e}") from e
    except (ValueError, yaml.YAMLError) as e:
        raise TestDefinitionError(f"{p}: invalid document: {e}") from e

    try:
        tests = parse_tests(document, hostname=hostname)
    except TestDefinitionError as e:
        raise TestDefinitionError(f"{p}: {e}") from e

    logger.info(f"Loaded {len(tests)} test(s) from {p}")
    return tests
