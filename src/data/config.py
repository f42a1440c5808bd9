"""
LaunchPulse Configuration Module
================================

Centralized configuration management using environment variables.
Supports both .env files and system environment variables.

Environment Variables:
    LAUNCHPULSE_REFERENCE_TZ: Zone for day/hour buckets (default: America/Los_Angeles)
    LAUNCHPULSE_LOCAL_TZ: Caller's display zone (default: unset = reference zone)
    LAUNCHPULSE_GAP_WINDOW: Top products examined by gap analysis (default: 10)

    LOG_LEVEL: Root log level (default: INFO)
    LOG_JSON: JSON structured logs (default: false)
    LOG_FILE: Optional rotating log file

    ENVIRONMENT: development / production (default: development)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


# Load environment variables from .env file if present
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get environment variable with optional default and required validation.

    Raises:
        ValueError: If required=True and variable is not set
    """
    value = os.getenv(key, default)
    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _check_zone(key: str, value: Optional[str]) -> None:
    if value is None:
        return
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"{key} is not a known time zone: {value}")


@dataclass
class AnalyticsSettings:
    """Analytics engine settings."""

    reference_timezone: str = field(
        default_factory=lambda: get_env("LAUNCHPULSE_REFERENCE_TZ", "America/Los_Angeles")
    )
    local_timezone: Optional[str] = field(default_factory=lambda: get_env("LAUNCHPULSE_LOCAL_TZ"))
    gap_window: int = field(default_factory=lambda: get_env_int("LAUNCHPULSE_GAP_WINDOW", 10))

    def __post_init__(self):
        """Validate configuration after initialization."""
        _check_zone("LAUNCHPULSE_REFERENCE_TZ", self.reference_timezone)
        _check_zone("LAUNCHPULSE_LOCAL_TZ", self.local_timezone)
        if self.gap_window <= 0:
            raise ValueError("gap_window must be positive")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE"))

    # Structured logging
    json_logs: bool = field(default_factory=lambda: get_env_bool("LOG_JSON", False))


@dataclass
class Settings:
    """Main application settings container."""

    analytics: AnalyticsSettings = field(default_factory=AnalyticsSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Application metadata
    app_name: str = "launchpulse"
    app_version: str = "1.0.0"
    environment: str = field(default_factory=lambda: get_env("ENVIRONMENT", "development"))

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() in ("production", "prod")


def load_settings() -> Settings:
    """
    Load and validate all application settings.

    Raises:
        ValueError: If configuration is invalid
    """
    return Settings()


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests change the environment between cases)."""
    global _settings
    _settings = None
