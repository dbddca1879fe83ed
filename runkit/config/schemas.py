"""
Configuration schemas using Pydantic for validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigError

_VALID_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "FALSE")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str | bool = Field(default="info", description="Root log level")
    colors: bool = Field(default=True, description="ANSI colors on console output")
    micros: bool = Field(default=False, description="Show microsecond timestamps")
    location: bool | int = Field(default=False, description="Show file:line")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Validate log level is a recognized level."""
        if isinstance(v, str) and v.upper() not in _VALID_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(_VALID_LEVELS)}"
            )
        return v

    model_config = ConfigDict(extra="allow")


class WatchConfig(BaseModel):
    """Configuration for watch mode."""

    patterns: list[str] = Field(
        default_factory=list, description="Globs matched against file base names"
    )
    ignore: list[str] = Field(
        default_factory=list, description="Globs matched against path or base name"
    )
    interval: float = Field(default=0.1, gt=0, description="Poll interval in seconds")
    root: str = Field(default=".", description="Directory tree to poll")

    @field_validator("patterns", "ignore", mode="before")
    @classmethod
    def split_single_pattern(cls, v: Any) -> Any:
        """Accept a single pattern string (e.g. from an env override)."""
        if isinstance(v, str):
            return [v]
        return v

    model_config = ConfigDict(extra="forbid")


class RunkitConfig(BaseModel):
    """Top-level runkit configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)

    model_config = ConfigDict(extra="allow")


def validate_config(config_dict: dict[str, Any]) -> RunkitConfig:
    """
    Validate a configuration dictionary.

    Args:
        config_dict: Plain configuration dict (e.g. Config.dict())

    Returns:
        Validated RunkitConfig

    Raises:
        ConfigError: If the configuration does not match the schema
    """
    try:
        return RunkitConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigError("invalid configuration", errors=e.error_count()) from e
