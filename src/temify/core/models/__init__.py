"""Core data models."""

from temify.core.models.config import Config, EventConfig, ModuleConfig, ValidationConfig

__all__ = [
    "Config",
    "EventConfig",
    "ModuleConfig",
    "ValidationConfig",
]
