"""Declarative field validation."""

from temify.core.validation.rules import Rules
from temify.core.validation.types import FieldError, ValidationResult
from temify.core.validation.validator import ValidationRule, Validator

__all__ = [
    "FieldError",
    "Rules",
    "ValidationResult",
    "ValidationRule",
    "Validator",
]
