"""Validation result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from temify.core.errors import InvariantError


@dataclass(frozen=True)
class FieldError:
    """A single violation reported by a rule."""

    field: str
    message: str
    code: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"field": self.field, "message": self.message, "code": self.code}


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of running one or more rules.

    ``errors`` is None when valid and a non-empty tuple otherwise.
    """

    valid: bool
    errors: tuple[FieldError, ...] | None = None

    def __post_init__(self) -> None:
        if self.errors is not None and not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))
        if self.valid and self.errors is not None:
            raise InvariantError(
                "Valid result must not carry errors",
                {"errors": self.errors},
            )
        if not self.valid and not self.errors:
            raise InvariantError("Invalid result must carry at least one error")

    @classmethod
    def ok(cls) -> ValidationResult:
        """A passing result."""
        return cls(valid=True)

    @classmethod
    def fail(cls, *errors: FieldError) -> ValidationResult:
        """A failing result with the given errors."""
        return cls(valid=False, errors=errors)

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"valid": self.valid}
        if self.errors is not None:
            data["errors"] = [e.to_dict() for e in self.errors]
        return data
