"""
Configuration management package.

This module provides:
- Config class for loading YAML configuration files with RUNKIT_* overrides
- Pydantic schemas for validating the loaded configuration
"""

from .config import Config
from .constants import DEFAULT_CONFIG_FILENAME, ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import LoggingConfig, RunkitConfig, WatchConfig, validate_config

__all__ = [
    "Config",
    "DEFAULT_CONFIG_FILENAME",
    "ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
    "LoggingConfig",
    "RunkitConfig",
    "WatchConfig",
    "validate_config",
]
