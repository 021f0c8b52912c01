"""Tests for the Rules factories."""

from __future__ import annotations

import math

import pytest

from temify.core.validation.rules import Rules
from temify.core.validation.types import FieldError


def only_error(result) -> FieldError:
    assert result.valid is False
    assert len(result.errors) == 1
    return result.errors[0]


class TestRequired:
    """Tests for Rules.required."""

    def test_passes_for_non_empty_string(self):
        result = Rules.required("name")({"name": "Ada"})
        assert result.valid is True
        assert result.errors is None

    @pytest.mark.parametrize("data", [{"name": ""}, {"name": None}, {}])
    def test_fails_for_missing_values(self, data):
        """Test empty string, None and absent keys all count as missing."""
        error = only_error(Rules.required("name")(data))
        assert error == FieldError(field="name", message="name is required", code="REQUIRED")

    @pytest.mark.parametrize("value", [0, False, [], "0"])
    def test_falsy_values_are_present(self, value):
        """Test that falsy values other than None and '' pass."""
        assert Rules.required("name")({"name": value}).valid is True

    def test_custom_message(self):
        error = only_error(Rules.required("name", "Give a name")({}))
        assert error.message == "Give a name"

    def test_missing_attribute_on_object(self):
        """Test objects without the attribute fail."""
        error = only_error(Rules.required("name")(object()))
        assert error.code == "REQUIRED"


class TestRange:
    """Tests for Rules.range."""

    @pytest.mark.parametrize("score", [0, 50, 100, 99.5])
    def test_passes_inside_inclusive_bounds(self, score):
        assert Rules.range("score", 0, 100)({"score": score}).valid is True

    @pytest.mark.parametrize("score", [-1, 101])
    def test_fails_outside_bounds(self, score):
        error = only_error(Rules.range("score", 0, 100)({"score": score}))
        assert error == FieldError(
            field="score",
            message="score must be between 0 and 100",
            code="OUT_OF_RANGE",
        )

    @pytest.mark.parametrize("score", ["50", None, True])
    def test_fails_for_non_numbers(self, score):
        """Test strings, None and booleans are not numbers."""
        error = only_error(Rules.range("score", 0, 100)({"score": score}))
        assert error == FieldError(
            field="score",
            message="score must be a number",
            code="INVALID_TYPE",
        )

    def test_custom_message_only_for_bound_violation(self):
        """Test that a custom message does not replace the type message."""
        rule = Rules.range("score", 0, 100, "Score out of bounds")
        assert only_error(rule({"score": 500})).message == "Score out of bounds"
        assert only_error(rule({"score": "x"})).message == "score must be a number"

    def test_nan_is_out_of_range(self):
        error = only_error(Rules.range("score", 0, 100)({"score": math.nan}))
        assert error.code == "OUT_OF_RANGE"


class TestMin:
    """Tests for Rules.min."""

    def test_passes_at_minimum(self):
        assert Rules.min("age", 18)({"age": 18}).valid is True

    def test_passes_above_minimum(self):
        assert Rules.min("age", 18)({"age": 30}).valid is True

    def test_fails_below_minimum(self):
        error = only_error(Rules.min("age", 18)({"age": 10}))
        assert error == FieldError(field="age", message="age must be at least 18", code="TOO_SMALL")

    def test_fails_for_non_number(self):
        error = only_error(Rules.min("age", 18)({"age": "18"}))
        assert error.code == "INVALID_TYPE"

    def test_custom_message(self):
        error = only_error(Rules.min("age", 18, "Too young")({"age": 1}))
        assert error.message == "Too young"


class TestMax:
    """Tests for Rules.max."""

    def test_passes_at_maximum(self):
        assert Rules.max("level", 99)({"level": 99}).valid is True

    def test_passes_below_maximum(self):
        assert Rules.max("level", 99)({"level": 1}).valid is True

    def test_fails_above_maximum(self):
        error = only_error(Rules.max("level", 99)({"level": 100}))
        assert error == FieldError(
            field="level",
            message="level must be at most 99",
            code="TOO_LARGE",
        )

    def test_fails_for_missing_field(self):
        error = only_error(Rules.max("level", 99)({}))
        assert error.code == "INVALID_TYPE"


class TestCustom:
    """Tests for Rules.custom."""

    def test_passes_when_predicate_true(self):
        rule = Rules.custom("email", lambda v: isinstance(v, str) and "@" in v, "Invalid email")
        assert rule({"email": "ada@example.com"}).valid is True

    def test_fails_when_predicate_false(self):
        rule = Rules.custom("email", lambda v: isinstance(v, str) and "@" in v, "Invalid email")
        error = only_error(rule({"email": "nope"}))
        assert error == FieldError(
            field="email",
            message="Invalid email",
            code="CUSTOM_VALIDATION",
        )

    def test_custom_error_code(self):
        rule = Rules.custom("tags", lambda v: bool(v), "Need tags", code="EMPTY_TAGS")
        assert only_error(rule({"tags": []})).code == "EMPTY_TAGS"

    def test_predicate_receives_raw_value(self):
        """Test that the predicate sees the field value unchanged."""
        seen = []
        sentinel = object()

        def predicate(value) -> bool:
            seen.append(value)
            return True

        Rules.custom("thing", predicate, "unused")({"thing": sentinel})
        assert seen == [sentinel]
