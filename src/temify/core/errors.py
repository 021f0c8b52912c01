"""Error taxonomy for the temify core."""

from __future__ import annotations

from typing import Any


def _render(value: Any) -> Any:
    """Turn details into plain JSON-friendly data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _render(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_render(v) for v in value]
    return value


class TemifyError(Exception):
    """Base class for all temify errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the error.

        Args:
            code: Machine-readable error code
            message: Human-readable description
            details: Optional structured context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            data["details"] = _render(self.details)
        return data


class ValidationError(TemifyError):
    """Raised when input is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("VALIDATION_ERROR", message, details)


class InvariantError(TemifyError):
    """Raised when internal state breaks a documented invariant."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("INVARIANT_ERROR", message, details)


class ConfigurationError(TemifyError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("CONFIGURATION_ERROR", message, details)


__all__ = [
    "ConfigurationError",
    "InvariantError",
    "TemifyError",
    "ValidationError",
]
