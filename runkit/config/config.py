"""
YAML configuration loading with environment variable overrides.

Example runkit.yaml:

    logging:
      level: info
      colors: true
    watch:
      patterns: ["*.py", "*.yaml"]
      ignore: [".git", "__pycache__", "build/*"]
      interval: 0.1
"""

import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from ..exceptions import ConfigError
from .constants import DEFAULT_CONFIG_FILENAME, ENV_PREFIX, MAX_CONFIG_SIZE_BYTES

_MISSING = object()


def _check_file_size(path: Path) -> None:
    """Refuse configuration files larger than MAX_CONFIG_SIZE_BYTES."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            f"configuration file '{path}' is {file_size} bytes, "
            f"exceeding maximum size of {MAX_CONFIG_SIZE_BYTES} bytes",
            path=str(path),
        )


def _convert_env_value(value: str) -> Any:
    """
    Convert environment variable string to an appropriate type.

    "null"/"none"/"" -> None, "true"/"false" -> bool, comma-separated -> list,
    numeric strings -> int or float, anything else stays a string.
    """
    if value.lower() in ("null", "none", ""):
        return None

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    if "," in value:
        return [_convert_env_value(v.strip()) for v in value.split(",")]

    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


class Config:
    """
    Configuration loaded from a YAML file.

    Supports environment variable overrides using the RUNKIT_ prefix:

        RUNKIT_<SECTION>_<KEY>=value

    Examples:
        RUNKIT_LOGGING_LEVEL=debug
        RUNKIT_WATCH_INTERVAL=0.5
        RUNKIT_WATCH_PATTERNS=*.py,*.toml

    Example:
        config = Config("runkit.yaml")
        interval = config.get("watch.interval", 0.1)
    """

    def __init__(
        self,
        fname: str | Path | None = None,
        enable_env_overrides: bool = True,
        env_prefix: str = ENV_PREFIX,
    ):
        """
        Initialize configuration from a YAML file.

        Args:
            fname: Path to the YAML file, or None for an empty configuration
                   (environment overrides still apply)
            enable_env_overrides: Whether to apply environment variable overrides
            env_prefix: Prefix for environment variables

        Raises:
            FileNotFoundError: If fname does not exist
            ConfigError: If the file is too large or not valid YAML
        """
        self._enable_env_overrides = enable_env_overrides
        self._env_prefix = env_prefix
        self._path: Path | None = Path(fname).resolve() if fname else None
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def from_cwd(cls, fname: str = DEFAULT_CONFIG_FILENAME) -> "Config":
        """Load fname from the working directory, or an empty config if absent."""
        path = Path.cwd() / fname
        return cls(path if path.is_file() else None)

    @property
    def path(self) -> Path | None:
        return self._path

    def _load(self) -> None:
        data: Any = {}
        if self._path is not None:
            _check_file_size(self._path)
            with open(self._path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(
                        "invalid YAML in configuration file", path=str(self._path)
                    ) from e
            if not isinstance(data, dict):
                raise ConfigError(
                    "configuration root must be a mapping", path=str(self._path)
                )

        if self._enable_env_overrides:
            for key, value in self.get_env_overrides().items():
                self._set_nested_value(data, key.split("."), value)

        self._data = data

    def reload(self) -> "Config":
        """Re-read the file and re-apply environment overrides."""
        self._load()
        return self

    def get_env_overrides(self) -> dict[str, Any]:
        """
        Get all environment variable overrides that would be applied.

        Returns:
            Mapping of dotted config path to converted value, e.g.
            {"watch.interval": 0.5}
        """
        if not self._enable_env_overrides:
            return {}

        overrides = {}
        for key, value in os.environ.items():
            if key.startswith(self._env_prefix):
                path = key[len(self._env_prefix) :].lower().split("_")
                overrides[".".join(path)] = _convert_env_value(value)
        return overrides

    def _set_nested_value(self, data: dict, path: list[str], value: Any) -> None:
        current = data
        for part in path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a value by dotted path ("watch.interval"), or default."""
        current: Any = self._data
        for part in path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def has(self, path: str) -> bool:
        """Check whether a dotted path exists."""
        return self.get(path, _MISSING) is not _MISSING

    def dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dict."""
        return self._data

    def __repr__(self) -> str:
        return f"Config(path={str(self._path) if self._path else None!r})"
