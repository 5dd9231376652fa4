"""Configuration loading for the reporting server and CLI.

Loads settings from .env file and environment variables with sensible defaults.
Validates configuration and provides clear error messages.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from lotdues.services.logging import LOG_LEVEL_MAP


@dataclass
class AppConfig:
    """Configuration for the lot dues application."""

    database_url: str = "sqlite:///./lotdues.db"
    """SQLAlchemy database URL (default: local SQLite)"""

    log_file: str = "logs/server.log"
    """Path to log file (default: logs/server.log)"""

    log_level: str = "INFO"
    """Logging level name (default: INFO)"""


def load_config(env_file: str = ".env") -> AppConfig:
    """
    Load configuration from .env file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (DATABASE_URL, LOG_FILE, LOG_LEVEL)
    2. .env file in project root
    3. Default values

    Args:
        env_file: Path to the .env file (default: .env)

    Returns:
        AppConfig with all settings

    Raises:
        ValueError: If a configured value is invalid
    """
    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(env_path)

    defaults = AppConfig()
    database_url = os.getenv("DATABASE_URL", defaults.database_url).strip()
    log_file = os.getenv("LOG_FILE", defaults.log_file).strip()
    log_level = os.getenv("LOG_LEVEL", defaults.log_level).strip().upper()

    if not database_url:
        raise ValueError(
            "DATABASE_URL is empty. "
            "Set DATABASE_URL environment variable or in .env file"
        )

    if log_level not in LOG_LEVEL_MAP:
        raise ValueError(
            f"Invalid LOG_LEVEL '{log_level}'. "
            f"Expected one of: {', '.join(LOG_LEVEL_MAP)}"
        )

    return AppConfig(
        database_url=database_url,
        log_file=log_file,
        log_level=log_level,
    )
