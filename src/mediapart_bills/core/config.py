#!/usr/bin/env python3
"""
Configuration Management for Mediapart Bills

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production) with appropriate
logging for each.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0"
)


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class MediapartConfig:
    """Mediapart account and transport configuration."""

    bills_dir: Path
    login: str | None = None
    password: str | None = None
    timeout: int = 30
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class Config:
    """
    Main configuration class for the bills scraper.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    mediapart: MediapartConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("MEDIAPART_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_mediapart_bills"
            data_dir = Path(os.getenv("MEDIAPART_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("MEDIAPART_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        mediapart = MediapartConfig(
            bills_dir=data_dir / "mediapart" / "bills",
            login=os.getenv("MEDIAPART_LOGIN"),
            password=os.getenv("MEDIAPART_PASSWORD"),
            timeout=int(os.getenv("MEDIAPART_TIMEOUT", "30")),
            user_agent=os.getenv("MEDIAPART_USER_AGENT", DEFAULT_USER_AGENT),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            mediapart=mediapart,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.mediapart.password and not self.mediapart.login:
            errors.append("MEDIAPART_LOGIN is required when MEDIAPART_PASSWORD is provided")

        if self.mediapart.timeout <= 0:
            errors.append("Mediapart timeout must be positive")

        if not self.mediapart.user_agent.strip():
            errors.append("MEDIAPART_USER_AGENT must not be empty")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from the HTTP stack in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "mediapart.login",
            "mediapart.password",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***"
                    elif isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_bills_dir() -> Path:
    """Get the stored bills directory path."""
    return get_config().mediapart.bills_dir


def is_development() -> bool:
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    return get_config().environment == Environment.PRODUCTION
