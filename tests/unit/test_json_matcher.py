"""
Unit tests for the subset-tolerant JSON matcher.
"""

import copy

import pytest

from apicheck.json_matcher import assert_json, json_diff, json_equal, prune_extra_keys


class TestAssertJSON:
    """Matching rules."""

    @pytest.mark.parametrize("actual", [None, {}, {"a": 1}, [1, 2], "text", 3])
    def test_no_expectation_always_matches(self, actual):
        assert assert_json(actual, None)
        assert assert_json(actual, {})

    def test_extra_keys_are_ignored_at_any_depth(self):
        expected = {"id": 1, "user": {"name": "a", "address": {"city": "x"}}}
        actual = {
            "id": 1,
            "extra": "x",
            "user": {"name": "a", "age": 3, "address": {"city": "x", "zip": "1"}},
        }

        assert assert_json(actual, expected)

    def test_differing_value_fails(self):
        assert not assert_json({"id": 2, "extra": True}, {"id": 1})

    def test_nested_differing_value_fails(self):
        assert not assert_json({"user": {"name": "b", "x": 1}}, {"user": {"name": "a"}})

    def test_missing_key_fails(self):
        assert not assert_json({"other": 1}, {"id": 1})

    def test_arrays_are_order_sensitive(self):
        assert not assert_json([1, 2], [2, 1])
        assert assert_json([1, 2], [1, 2])

    def test_arrays_inside_objects_have_no_subset_tolerance(self):
        expected = {"items": [{"id": 1}]}

        assert not assert_json({"items": [{"id": 1, "extra": 2}]}, expected)
        assert not assert_json({"items": [{"id": 1}, {"id": 2}]}, expected)
        assert assert_json({"items": [{"id": 1}], "total": 1}, expected)

    def test_type_mismatch_is_inequality(self):
        assert not assert_json({"id": "1"}, {"id": 1})
        assert not assert_json({"id": [1]}, {"id": {"0": 1}})
        assert not assert_json([{"id": 1}], {"id": 1})

    def test_booleans_do_not_equal_numbers(self):
        assert not assert_json({"flag": 1}, {"flag": True})
        assert not assert_json({"flag": False}, {"flag": 0})

    def test_int_and_float_compare_numerically(self):
        assert assert_json({"n": 1.0}, {"n": 1})

    def test_null_equals_null(self):
        assert assert_json({"v": None, "w": 1}, {"v": None})
        assert not assert_json({"v": 0}, {"v": None})

    def test_nested_empty_object_requires_object(self):
        assert assert_json({"meta": {"anything": 1}}, {"meta": {}})
        assert not assert_json({"meta": "string"}, {"meta": {}})

    def test_actual_is_not_mutated(self):
        actual = {"id": 1, "extra": "x", "nested": {"keep": 1, "drop": 2}}
        snapshot = copy.deepcopy(actual)

        assert assert_json(actual, {"id": 1, "nested": {"keep": 1}})
        assert actual == snapshot


class TestHelpers:
    """Pruning, equality and diff helpers."""

    def test_prune_returns_copy(self):
        actual = {"a": 1, "b": {"c": 2, "d": 3}}

        pruned = prune_extra_keys(actual, {"b": {"c": 0}})

        assert pruned == {"b": {"c": 2}}
        assert actual == {"a": 1, "b": {"c": 2, "d": 3}}

    def test_json_equal_lists_of_dicts(self):
        assert json_equal([{"a": [1, None]}], [{"a": [1, None]}])
        assert not json_equal([{"a": 1}], [{"a": 1, "b": 2}])

    def test_diff_empty_on_match(self):
        assert json_diff({"id": 1, "extra": 2}, {"id": 1}) == []

    def test_diff_reports_paths(self):
        diffs = json_diff(
            {"id": 2, "user": {"name": "b"}, "tags": [1]},
            {"id": 1, "user": {"name": "a", "age": 3}, "tags": [1, 2]},
        )

        assert "id: 1 != 2" in diffs
        assert "user.name: 'a' != 'b'" in diffs
        assert "user.age: missing key in actual" in diffs
        assert "tags: length mismatch (expected 2, got 1)" in diffs

    def test_diff_type_mismatch(self):
        assert json_diff({"id": "1"}, {"id": 1}) == ["id: type mismatch (expected number, got string)"]

    def test_diff_flags_extra_keys_inside_arrays(self):
        diffs = json_diff({"items": [{"id": 1, "x": 2}]}, {"items": [{"id": 1}]})

        assert len(diffs) == 1
        assert diffs[0].startswith("items[0]:")
