"""Factories for common validation rules."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from temify.core.validation.types import FieldError, ValidationResult

Rule = Callable[[Any], ValidationResult]


def _field_value(value: Any, field: str) -> Any:
    """Read a field from a mapping or object; missing reads as None."""
    if isinstance(value, Mapping):
        return value.get(field)
    return getattr(value, field, None)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a number here
    return isinstance(value, int | float) and not isinstance(value, bool)


def _failure(field: str, message: str, code: str) -> ValidationResult:
    return ValidationResult.fail(FieldError(field=str(field), message=message, code=code))


def _not_a_number(field: str) -> ValidationResult:
    return _failure(field, f"{field} must be a number", "INVALID_TYPE")


class Rules:
    """Common validation rules. Each factory returns a rule closed over its arguments."""

    @staticmethod
    def required(field: str, message: str | None = None) -> Rule:
        """Field must be present, not None and not the empty string."""

        def rule(value: Any) -> ValidationResult:
            field_value = _field_value(value, field)
            if field_value is None or field_value == "":
                return _failure(field, message or f"{field} is required", "REQUIRED")
            return ValidationResult.ok()

        return rule

    @staticmethod
    def range(
        field: str,
        min: float,
        max: float,
        message: str | None = None,
    ) -> Rule:
        """Field must be a number within [min, max]."""

        def rule(value: Any) -> ValidationResult:
            field_value = _field_value(value, field)
            if not _is_number(field_value):
                return _not_a_number(field)
            if min <= field_value <= max:
                return ValidationResult.ok()
            return _failure(
                field,
                message or f"{field} must be between {min} and {max}",
                "OUT_OF_RANGE",
            )

        return rule

    @staticmethod
    def min(field: str, min_value: float, message: str | None = None) -> Rule:
        """Field must be a number no smaller than min_value."""

        def rule(value: Any) -> ValidationResult:
            field_value = _field_value(value, field)
            if not _is_number(field_value):
                return _not_a_number(field)
            if field_value >= min_value:
                return ValidationResult.ok()
            return _failure(
                field,
                message or f"{field} must be at least {min_value}",
                "TOO_SMALL",
            )

        return rule

    @staticmethod
    def max(field: str, max_value: float, message: str | None = None) -> Rule:
        """Field must be a number no larger than max_value."""

        def rule(value: Any) -> ValidationResult:
            field_value = _field_value(value, field)
            if not _is_number(field_value):
                return _not_a_number(field)
            if field_value <= max_value:
                return ValidationResult.ok()
            return _failure(
                field,
                message or f"{field} must be at most {max_value}",
                "TOO_LARGE",
            )

        return rule

    @staticmethod
    def custom(
        field: str,
        predicate: Callable[[Any], bool],
        message: str,
        code: str = "CUSTOM_VALIDATION",
    ) -> Rule:
        """Field value must satisfy predicate."""

        def rule(value: Any) -> ValidationResult:
            if predicate(_field_value(value, field)):
                return ValidationResult.ok()
            return _failure(field, message, code)

        return rule
