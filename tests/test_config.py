"""Configuration tests."""

import json
import logging

import pytest
from roma_core.utils.config import RouterConfig, load_config
from roma_core.utils.log import JsonFormatter, configure_logging


class TestRouterConfig:
    """Test RouterConfig loading."""

    def test_defaults(self):
        """Test default values."""
        config = RouterConfig()
        assert config.supported_methods == ["GET", "POST", "PUT", "PATCH", "DELETE"]
        assert config.csrf_enabled is True

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped."""
        config = RouterConfig.from_dict({"log_level": "DEBUG", "bogus": 1})
        assert config.log_level == "DEBUG"

    def test_from_yaml(self, tmp_path):
        """Test YAML loading."""
        path = tmp_path / "roma.yaml"
        path.write_text("csrf_enabled: false\nsupported_methods: [GET, POST]\n")

        config = RouterConfig.from_yaml(str(path))
        assert config.csrf_enabled is False
        assert config.supported_methods == ["GET", "POST"]

    def test_from_env(self, monkeypatch):
        """Test environment variables with type conversion."""
        monkeypatch.setenv("ROMA_CSRF_ENABLED", "false")
        monkeypatch.setenv("ROMA_CSRF_TOKEN_LIFETIME", "60")
        monkeypatch.setenv("ROMA_SUPPORTED_METHODS", "GET, DELETE")

        config = RouterConfig.from_env()
        assert config.csrf_enabled is False
        assert config.csrf_token_lifetime == 60
        assert config.supported_methods == ["GET", "DELETE"]

    def test_from_env_numeric_string_fields(self, monkeypatch):
        """Test numeric-looking values stay strings for string fields."""
        monkeypatch.setenv("ROMA_CSRF_SECRET", "123456")
        monkeypatch.setenv("ROMA_LOG_LEVEL", "10")
        monkeypatch.setenv("ROMA_CSRF_FAILURE_STATUS", "419")

        config = RouterConfig.from_env()
        assert config.csrf_secret == "123456"
        assert config.log_level == "10"
        assert config.csrf_failure_status == 419

    def test_from_env_invalid_int(self, monkeypatch):
        """Test a non-numeric value for an int field is rejected."""
        monkeypatch.setenv("ROMA_CSRF_TOKEN_LIFETIME", "soon")
        with pytest.raises(ValueError):
            RouterConfig.from_env()

    def test_merge(self):
        """Test merging returns an updated copy."""
        config = RouterConfig()
        merged = config.merge({"log_format": "json"})
        assert merged.log_format == "json"
        assert config.log_format == "text"


class TestLoadConfig:
    """Test layered configuration."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment beats file beats defaults."""
        path = tmp_path / "roma.json"
        path.write_text(json.dumps({"log_level": "WARNING", "controller_namespace": "admin"}))
        monkeypatch.setenv("ROMA_LOG_LEVEL", "DEBUG")

        config = load_config(str(path))
        assert config.log_level == "DEBUG"
        assert config.controller_namespace == "admin"

    def test_missing_file(self, tmp_path):
        """Test a missing file falls back to defaults."""
        config = load_config(str(tmp_path / "absent.yaml"))
        assert config == RouterConfig()


class TestConfigureLogging:
    """Test logging setup."""

    def test_json_format(self):
        """Test json log format installs the JSON formatter."""
        handler = configure_logging(RouterConfig(log_format="json", log_level="debug"))
        try:
            assert isinstance(handler.formatter, JsonFormatter)
            assert logging.getLogger().level == logging.DEBUG

            record = logging.LogRecord("roma", logging.INFO, __file__, 1, "hello %s", ("world",), None)
            data = json.loads(handler.formatter.format(record))
            assert data["message"] == "hello world"
            assert data["level"] == "INFO"
        finally:
            logging.getLogger().removeHandler(handler)
            logging.getLogger().setLevel(logging.WARNING)

    def test_numeric_level(self):
        """Test a numeric level string from the environment is accepted."""
        handler = configure_logging(RouterConfig(log_level="10"))
        try:
            assert logging.getLogger().level == logging.DEBUG
        finally:
            logging.getLogger().removeHandler(handler)
            logging.getLogger().setLevel(logging.WARNING)
