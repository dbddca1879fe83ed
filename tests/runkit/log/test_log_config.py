"""Tests for LogConfig and level resolution."""

import logging

import pytest

from runkit.exceptions import LoggingError
from runkit.log import InvalidLogLevelError, LogConfig, resolve_level

pytestmark = pytest.mark.unit


class TestResolveLevel:
    """Tests for resolve_level."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("info", logging.INFO),
            ("DEBUG", logging.DEBUG),
            ("trace", 5),
            ("warning", logging.WARNING),
            (" error ", logging.ERROR),
            ("critical", logging.CRITICAL),
            ("false", False),
            (False, False),
            (True, logging.INFO),
            (15, 15),
            ("25", 25),
        ],
    )
    def test_resolves(self, level, expected):
        """Test names, numbers and booleans resolve."""
        assert resolve_level(level) == expected

    def test_unknown_name_raises(self):
        """Test an unknown level name is rejected."""
        with pytest.raises(InvalidLogLevelError) as exc_info:
            resolve_level("verbose")
        assert exc_info.value.level == "verbose"
        assert isinstance(exc_info.value, LoggingError)


class TestLogConfig:
    """Tests for LogConfig constructors."""

    def test_from_params_defaults(self):
        """Test defaults: no location, no micros, colors on."""
        config = LogConfig.from_params("info")
        assert config == LogConfig(level=logging.INFO, location=0, micros=False, colors=True)

    def test_location_bool_to_depth(self):
        """Test location=True means depth 1."""
        assert LogConfig.from_params("info", location=True).location == 1
        assert LogConfig.from_params("info", location=False).location == 0
        assert LogConfig.from_params("info", location=3).location == 3

    def test_frozen(self):
        """Test LogConfig is immutable."""
        config = LogConfig.from_params("info")
        with pytest.raises(AttributeError):
            config.level = logging.DEBUG  # type: ignore[misc]

    def test_from_config_section(self, sample_config_dict):
        """Test building from the logging section of a config dict."""
        config = LogConfig.from_config(sample_config_dict)
        assert config.level == logging.DEBUG
        assert config.colors is False

    def test_from_config_nested_section(self):
        """Test a dotted section path."""
        config = LogConfig.from_config({"tools": {"log": {"level": "error"}}}, section="tools.log")
        assert config.level == logging.ERROR

    def test_from_config_missing_section(self):
        """Test a missing section falls back to defaults."""
        config = LogConfig.from_config({"watch": {}})
        assert config.level == logging.INFO
        assert config.colors is True
