"""Configuration management for the SendGrid REST client."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_REST_API_HOST = "https://api.sendgrid.com/v3/"


class SendGridConfig(BaseSettings):
    """SendGrid API configuration."""

    rest_api_host: str = Field(
        DEFAULT_REST_API_HOST,
        description="API base URL including scheme and version segment",
    )
    api_key: Optional[str] = Field(None, description="SendGrid API key (bearer token)")

    model_config = SettingsConfigDict(env_prefix="SENDGRID_", case_sensitive=False)

    @classmethod
    def test_env(cls) -> "SendGridConfig":
        """Configuration for the test environment."""
        return cls(rest_api_host=DEFAULT_REST_API_HOST)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file_path: Optional[str] = Field(None, description="Path to log file")
    max_file_size: int = Field(10 * 1024 * 1024, description="Maximum log file size in bytes")
    backup_count: int = Field(5, description="Number of backup log files to keep")
    console_output: bool = Field(True, description="Enable console logging")

    model_config = SettingsConfigDict(env_prefix="SENDGRID_LOG_", case_sensitive=False)


class Settings(BaseModel):
    """Main settings."""

    sendgrid: SendGridConfig = Field(default_factory=SendGridConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    if not config_file.exists():
        return {}

    with open(config_file, "r") as f:
        if config_file.suffix.lower() in [".yaml", ".yml"]:
            return yaml.safe_load(f) or {}
        elif config_file.suffix.lower() == ".json":
            return json.load(f)
        else:
            raise ConfigurationError(f"Unsupported config file format: {config_file.suffix}")


@lru_cache()
def load_settings(
    config_dir: Optional[Path] = None,
    env_file: Optional[str] = None,
    config_file: Optional[str] = None,
) -> Settings:
    """
    Load settings from multiple sources.

    Sources are applied in order of precedence (later sources override earlier):
    1. Default values
    2. Environment file (.env) and environment variables
    3. Configuration file (YAML/JSON), sections ``sendgrid`` and ``logging``

    Args:
        config_dir: Directory containing config files (default: current directory)
        env_file: Path to environment file (default: .env in config_dir)
        config_file: Path to configuration file (default: config.yaml in config_dir)

    Returns:
        Loaded settings instance

    Raises:
        ConfigurationError: If a config source is unreadable or invalid
    """
    if config_dir is None:
        config_dir = Path.cwd()

    env_path = Path(env_file) if env_file else config_dir / ".env"
    config_path = Path(config_file) if config_file else config_dir / "config.yaml"

    if env_path.exists():
        load_dotenv(env_path)

    file_config = _load_config_file(config_path)
    if not isinstance(file_config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    try:
        return Settings(
            sendgrid=SendGridConfig(**(file_config.get("sendgrid") or {})),
            logging=LoggingConfig(**(file_config.get("logging") or {})),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", cause=e) from e
