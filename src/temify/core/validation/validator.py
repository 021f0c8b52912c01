"""Composable validator with a fluent rule API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

from temify.core.errors import InvariantError, ValidationError
from temify.core.models.config import ValidationConfig
from temify.core.validation.types import FieldError, ValidationResult

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ValidationRule = Callable[[T], ValidationResult]


class Validator(Generic[T]):
    """
    Ordered list of validation rules.

    Every rule runs on every call; errors from all failing rules are
    collected in rule order so callers see every violation at once.
    """

    def __init__(self, config: ValidationConfig | None = None) -> None:
        """
        Initialize the validator.

        Args:
            config: Validation configuration
        """
        self.config = config or ValidationConfig()
        self._rules: list[ValidationRule[T]] = []

    def rule(self, rule: ValidationRule[T]) -> Validator[T]:
        """Append a rule. Returns self for chaining."""
        self._rules.append(rule)
        return self

    def validate(self, value: T) -> ValidationResult:
        """Run all rules against a value."""
        errors: list[FieldError] = []

        for rule in self._rules:
            result = rule(value)
            if not isinstance(result, ValidationResult):
                raise InvariantError(
                    "Validation rule must return a ValidationResult",
                    {"rule": getattr(rule, "__qualname__", repr(rule))},
                )
            if not result.valid and result.errors:
                errors.extend(result.errors)

        if not errors:
            return ValidationResult.ok()
        return ValidationResult.fail(*errors)

    def validate_or_throw(self, value: T) -> None:
        """Validate and raise ValidationError if invalid."""
        self._raise_if_invalid(self.validate(value))

    def check(self, value: T) -> ValidationResult:
        """Validate, raising instead of returning when configured to."""
        result = self.validate(value)
        if self.config.throw_on_error:
            self._raise_if_invalid(result)
        return result

    @staticmethod
    def _raise_if_invalid(result: ValidationResult) -> None:
        if result.valid:
            return
        logger.debug(
            "Validation failed",
            errors=[e.to_dict() for e in result.errors or ()],
        )
        raise ValidationError("Validation failed", {"errors": result.errors})

    @property
    def rules(self) -> tuple[ValidationRule[T], ...]:
        """Registered rules in order."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
