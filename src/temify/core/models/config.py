"""Configuration models using Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from temify.core.errors import ConfigurationError


class EventConfig(BaseModel):
    """Event bus configuration."""

    log_failures: bool = True


class ValidationConfig(BaseModel):
    """Validator configuration."""

    throw_on_error: bool = False


class ModuleConfig(BaseModel):
    """Opaque settings for modules built on top of the core."""

    metrics: dict[str, Any] = {}
    levels: dict[str, Any] = {}
    achievements: dict[str, Any] = {}
    streaks: dict[str, Any] = {}
    quests: dict[str, Any] = {}
    leaderboards: dict[str, Any] = {}


class Config(BaseSettings):
    """Main engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TEMIFY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    events: EventConfig = Field(default_factory=EventConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    modules: ModuleConfig = Field(default_factory=ModuleConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Config:
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open() as f:
            data = yaml.safe_load(f)

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {path}",
                {"path": str(path)},
            )

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create configuration from dictionary."""
        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid configuration",
                {"errors": e.errors(include_url=False)},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump()
