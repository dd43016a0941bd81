# apicheck/json_matcher.py
"""
Subset-tolerant JSON comparison.

An expected object only has to be a "subset" of the actual one: keys present
in the actual object but not in the expected object are ignored, at any
nesting depth reached through objects. Arrays and scalars get no tolerance.
"""

from __future__ import annotations

from typing import Any, Dict, List


def prune_extra_keys(actual: Dict[str, Any], expected: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of `actual` keeping only keys that `expected` declares"""
    pruned: Dict[str, Any] = {}
    for key, value in actual.items():
        if key not in expected:
            continue
        if isinstance(value, dict) and isinstance(expected[key], dict):
            value = prune_extra_keys(value, expected[key])
        pruned[key] = value
    return pruned


def json_equal(a: Any, b: Any) -> bool:
    """
    Deep equality over decoded JSON values.

    Differs from == in one place: booleans never equal numbers, so
    True does not match 1.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(json_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (dict, list)) or isinstance(b, (dict, list)):
        return False
    return a == b


def assert_json(actual: Any, expected: Any) -> bool:
    """
    Check whether `actual` satisfies `expected`.

    None or {} as the expectation always matches. `actual` is never modified.
    """
    if expected is None:
        return True
    if isinstance(expected, dict) and len(expected) == 0:
        return True
    if isinstance(expected, dict) and isinstance(actual, dict):
        return json_equal(prune_extra_keys(actual, expected), expected)
    return json_equal(actual, expected)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def json_diff(actual: Any, expected: Any, path: str = "") -> List[str]:
    """
    Describe why `actual` does not satisfy `expected`, one line per difference.

    Uses the same tolerance as assert_json, so an empty list means a match.
    """
    if expected is None:
        return []
    if not path and isinstance(expected, dict) and len(expected) == 0:
        return []

    label = path or "$"
    diffs: List[str] = []

    if isinstance(expected, dict) and isinstance(actual, dict):
        for key, exp_value in expected.items():
            new_path = f"{path}.{key}" if path else key
            if key not in actual:
                diffs.append(f"{new_path}: missing key in actual")
            else:
                diffs.extend(json_diff(actual[key], exp_value, new_path))
        return diffs

    if isinstance(expected, list) and isinstance(actual, list):
        if len(expected) != len(actual):
            diffs.append(f"{label}: length mismatch (expected {len(expected)}, got {len(actual)})")
            return diffs
        for i, (act_item, exp_item) in enumerate(zip(actual, expected)):
            item_diffs = json_diff(act_item, exp_item, f"{path}[{i}]")
            # arrays get no subset tolerance
            if not item_diffs and not json_equal(act_item, exp_item):
                item_diffs = [f"{path}[{i}]: {exp_item!r} != {act_item!r}"]
            diffs.extend(item_diffs)
        return diffs

    if _type_name(expected) != _type_name(actual):
        diffs.append(f"{label}: type mismatch (expected {_type_name(expected)}, got {_type_name(actual)})")
    elif not json_equal(actual, expected):
        diffs.append(f"{label}: {expected!r} != {actual!r}")
    return diffs
