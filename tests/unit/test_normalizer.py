"""Tests for testharness result normalization."""

import pytest

from wave_results.results.normalizer import normalize_result


class TestHarnessStatus:
    """Harness-level status mapping."""

    @pytest.mark.parametrize(
        "code,label",
        [(0, "OK"), (1, "ERROR"), (2, "TIMEOUT"), (3, "NOTRUN")],
    )
    def test_harness_codes(self, code, label):
        assert normalize_result({"status": code})["status"] == label

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError):
            normalize_result({"status": 7})


class TestSubtests:
    """Sub-test mapping and field renames."""

    @pytest.mark.parametrize(
        "code,label",
        [(0, "PASS"), (1, "FAIL"), (2, "TIMEOUT"), (3, "NOTRUN")],
    )
    def test_subtest_codes(self, code, label):
        result = normalize_result({"status": 0, "tests": [{"name": "x", "status": code}]})
        assert result["subtests"][0]["status"] == label

    def test_tests_renamed_to_subtests(self):
        result = normalize_result({"status": 0, "tests": [{"name": "x", "status": 0}]})
        assert "tests" not in result
        assert result["subtests"] == [{"name": "x", "status": "PASS"}]

    def test_stack_removed_at_both_levels(self):
        raw = {
            "status": 1,
            "stack": "harness trace",
            "tests": [{"name": "x", "status": 1, "stack": "subtest trace"}],
        }
        result = normalize_result(raw)
        assert "stack" not in result
        assert "stack" not in result["subtests"][0]

    def test_no_subtests(self):
        result = normalize_result({"status": 2, "message": "timed out"})
        assert result == {"status": "TIMEOUT", "message": "timed out"}


class TestNormalizeIsPure:
    """Normalization returns a new record and can be reapplied."""

    def test_input_not_mutated(self):
        raw = {"status": 0, "stack": "s", "tests": [{"name": "x", "status": 1, "stack": "t"}]}
        normalize_result(raw)
        assert raw["status"] == 0
        assert raw["tests"][0]["stack"] == "t"

    def test_idempotent(self):
        raw = {"status": 1, "tests": [{"name": "x", "status": 0}, {"name": "y", "status": 3}]}
        once = normalize_result(raw)
        assert normalize_result(once) == once
