"""
Unit tests for loading test definitions from documents and files.
"""

import json

import pytest

from apicheck.api_types import TestDefinitionError
from apicheck.json_matcher import assert_json
from apicheck.loader import load_tests, parse_test, parse_tests
from apicheck.request_builder import build_request

YAML_SUITE = """
hostname: http://localhost:8080
tests:
  - name: get user
    endpoint: /users/1
    request:
      queryParams:
        verbose: true
      headers:
        Accept: application/json
    response:
      statusCode: 200
      json:
        id: 1
      headers:
        Content-Type: application/json
  - name: create user
    hostname: http://other:9000
    endpoint: /users
    method: post
    request:
      json:
        name: a
    response:
      status_code: 201
"""


class TestParse:

    def test_camel_case_keys(self):
        test = parse_test(
            {
                "hostname": "http://h",
                "endpoint": "/x",
                "method": "put",
                "request": {"queryParams": {"a": 1}, "body": "raw"},
                "response": {"statusCode": "204", "body": "done"},
            }
        )

        assert test.method == "PUT"
        assert test.request.query_params == {"a": "1"}
        assert test.request.body == "raw"
        assert test.response.status_code == 204
        assert test.response.body == "done"

    def test_snake_case_keys_and_defaults(self):
        test = parse_test({"endpoint": "/x", "response": {"status_code": 404}}, {"hostname": "http://h"})

        assert test.hostname == "http://h"
        assert test.method == "GET"
        assert test.response.status_code == 404
        assert test.response.json is None
        assert test.request.json is None

    def test_missing_hostname(self):
        with pytest.raises(TestDefinitionError, match="hostname"):
            parse_test({"endpoint": "/x"})

    def test_bad_status_code(self):
        with pytest.raises(TestDefinitionError, match="statusCode"):
            parse_test({"hostname": "http://h", "response": {"statusCode": "ok"}})

    def test_headers_must_be_mapping(self):
        with pytest.raises(TestDefinitionError):
            parse_test({"hostname": "http://h", "request": {"headers": ["a"]}})

    def test_document_list(self):
        tests = parse_tests([{"hostname": "http://h", "endpoint": "/a"}, {"hostname": "http://h", "endpoint": "/b"}])

        assert [t.endpoint for t in tests] == ["/a", "/b"]

    def test_error_names_entry(self):
        with pytest.raises(TestDefinitionError, match="broken"):
            parse_tests({"hostname": "http://h", "tests": [{"name": "broken", "response": "nope"}]})

    def test_mapping_without_tests_key(self):
        with pytest.raises(TestDefinitionError):
            parse_tests({"hostname": "http://h"})

    def test_hostname_argument_overrides_suite_default(self):
        tests = parse_tests({"hostname": "http://suite", "tests": [{"endpoint": "/a"}]}, hostname="http://cli")

        assert tests[0].hostname == "http://cli"


class TestLoadFiles:

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "suite.yaml"
        path.write_text(YAML_SUITE, encoding="utf-8")

        first, second = load_tests(path)

        assert first.name == "get user"
        assert first.hostname == "http://localhost:8080"
        assert first.request.query_params == {"verbose": "True"}
        assert first.response.json == {"id": 1}
        assert first.response.headers == {"Content-Type": "application/json"}
        assert second.hostname == "http://other:9000"
        assert second.method == "POST"
        assert second.request.json == {"name": "a"}
        assert second.response.status_code == 201

    def test_yaml_dates_stay_strings(self, tmp_path):
        path = tmp_path / "dates.yml"
        path.write_text(
            "hostname: http://h\n"
            "tests:\n"
            "  - endpoint: /events\n"
            "    method: POST\n"
            "    request:\n"
            "      json: {created: 2024-01-01, at: 2024-01-01T10:00:00Z}\n"
            "    response:\n"
            "      json: {created: 2024-01-01}\n",
            encoding="utf-8",
        )

        (test,) = load_tests(path)

        assert test.request.json == {"created": "2024-01-01", "at": "2024-01-01T10:00:00Z"}
        assert test.response.json == {"created": "2024-01-01"}
        assert assert_json({"created": "2024-01-01", "id": 7}, test.response.json)
        assert build_request(test).content == b'{"at":"2024-01-01T10:00:00Z","created":"2024-01-01"}'

    def test_load_json(self, tmp_path):
        path = tmp_path / "suite.json"
        path.write_text(json.dumps([{"hostname": "http://h", "endpoint": "/ping"}]), encoding="utf-8")

        (test,) = load_tests(path)

        assert test.endpoint == "/ping"

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(TestDefinitionError, match="broken.json"):
            load_tests(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(TestDefinitionError, match="cannot read"):
            load_tests(tmp_path / "absent.yaml")
