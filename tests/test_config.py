"""Tests for configuration loading."""

import json

import pytest

from sendgrid_rest.config import (
    DEFAULT_REST_API_HOST,
    LoggingConfig,
    SendGridConfig,
    load_settings,
)
from sendgrid_rest.endpoints import SendGridEndpoint
from sendgrid_rest.exceptions import ConfigurationError


class TestSendGridConfig:
    """Tests for SendGridConfig."""

    def test_default_host(self):
        """Test the production default."""
        assert SendGridConfig().rest_api_host == DEFAULT_REST_API_HOST
        assert DEFAULT_REST_API_HOST == "https://api.sendgrid.com/v3/"

    def test_test_env(self):
        """Test the test environment configuration."""
        assert SendGridConfig.test_env().rest_api_host.startswith("https://")

    def test_environment_override(self, monkeypatch):
        """Test reading the host and key from the environment."""
        monkeypatch.setenv("SENDGRID_REST_API_HOST", "http://localhost:8080/v3/")
        monkeypatch.setenv("SENDGRID_API_KEY", "from-env")

        config = SendGridConfig()

        assert config.rest_api_host == "http://localhost:8080/v3/"
        assert config.api_key == "from-env"

    def test_host_is_not_validated(self):
        """Test that malformed hosts are accepted at this layer."""
        assert SendGridConfig(rest_api_host="not a url").rest_api_host == "not a url"


class TestEndpoints:
    """Tests for the endpoint registry."""

    def test_paths(self):
        """Test each endpoint's path suffix."""
        assert SendGridEndpoint.MAIL_SEND.path == "/mail/send"
        assert SendGridEndpoint.TEMPLATES.path == "/templates"

    def test_closed_set(self):
        """Test that unknown endpoints are not representable."""
        with pytest.raises(ValueError):
            SendGridEndpoint("/unknown")


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self, tmp_path):
        """Test loading with no files present."""
        settings = load_settings(config_dir=tmp_path)

        assert settings.sendgrid.rest_api_host == DEFAULT_REST_API_HOST
        assert settings.sendgrid.api_key is None
        assert settings.logging.level == "INFO"

    def test_yaml_file(self, tmp_path):
        """Test loading a YAML config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "sendgrid:\n"
            "  api_key: yaml-key\n"
            "  rest_api_host: https://yaml.example.com/v3/\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        settings = load_settings(config_dir=tmp_path)

        assert settings.sendgrid.api_key == "yaml-key"
        assert settings.sendgrid.rest_api_host == "https://yaml.example.com/v3/"
        assert settings.logging.level == "DEBUG"

    def test_json_file(self, tmp_path):
        """Test loading a JSON config file."""
        config_file = tmp_path / "settings.json"
        config_file.write_text(json.dumps({"sendgrid": {"api_key": "json-key"}}))

        settings = load_settings(config_file=str(config_file))

        assert settings.sendgrid.api_key == "json-key"

    def test_env_file(self, tmp_path):
        """Test loading the API key from a .env file."""
        (tmp_path / ".env").write_text("SENDGRID_API_KEY=dotenv-key\n")

        settings = load_settings(config_dir=tmp_path)

        assert settings.sendgrid.api_key == "dotenv-key"

    def test_file_overrides_environment(self, tmp_path, monkeypatch):
        """Test that config file values win over the environment."""
        monkeypatch.setenv("SENDGRID_API_KEY", "env-key")
        (tmp_path / "config.yaml").write_text("sendgrid:\n  api_key: file-key\n")

        settings = load_settings(config_dir=tmp_path)

        assert settings.sendgrid.api_key == "file-key"

    def test_unsupported_format(self, tmp_path):
        """Test that unknown config file formats are rejected."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("x = 1")

        with pytest.raises(ConfigurationError):
            load_settings(config_file=str(config_file))

    def test_invalid_values(self, tmp_path):
        """Test that invalid values raise ConfigurationError."""
        (tmp_path / "config.yaml").write_text("logging:\n  backup_count: many\n")

        with pytest.raises(ConfigurationError):
            load_settings(config_dir=tmp_path)


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_environment_override(self, monkeypatch):
        """Test the log level environment variable."""
        monkeypatch.setenv("SENDGRID_LOG_LEVEL", "WARNING")

        assert LoggingConfig().level == "WARNING"
