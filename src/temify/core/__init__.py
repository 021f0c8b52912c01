"""Core module - event bus, validation and shared types."""

from temify.core.errors import ConfigurationError, InvariantError, TemifyError, ValidationError
from temify.core.events import WILDCARD, Event, EventBus, EventMetadata, ListenerFailure
from temify.core.models import Config
from temify.core.validation import FieldError, Rules, ValidationResult, Validator

__all__ = [
    "WILDCARD",
    "Config",
    "ConfigurationError",
    "Event",
    "EventBus",
    "EventMetadata",
    "FieldError",
    "InvariantError",
    "ListenerFailure",
    "Rules",
    "TemifyError",
    "ValidationError",
    "ValidationResult",
    "Validator",
]
