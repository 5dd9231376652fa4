"""Logging setup shared by the report server and the report CLI.

Both entry points log to stdout and to a file. The level comes from the loaded
configuration (LOG_LEVEL, default INFO). Database driver loggers stay at
WARNING unless the level is DEBUG, so SQL echo does not flood report logs.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Third-party loggers that are only useful when debugging queries
DATABASE_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite")


def get_log_level(level_name: Optional[str] = None) -> int:
    """Resolve a level name, falling back to LOG_LEVEL and then INFO.

    Args:
        level_name: Level name such as "debug" (default: LOG_LEVEL env var)

    Returns:
        Logging level constant
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL", "INFO")
    return LOG_LEVEL_MAP.get(level_name.strip().upper(), logging.INFO)


def setup_server_logging(
    log_file: str = "logs/server.log", log_level: Optional[str] = None
) -> None:
    """
    Configure the root logger for the report server and CLI.

    Args:
        log_file: Path to log file; parent directories are created
        log_level: Level name, usually AppConfig.log_level (default: LOG_LEVEL env var)
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    level = get_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Repeated setup (server reload, CLI in tests) must not stack handlers
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    for handler in (logging.StreamHandler(sys.stdout), logging.FileHandler(log_path)):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    database_level = logging.DEBUG if level == logging.DEBUG else logging.WARNING
    for name in DATABASE_LOGGERS:
        logging.getLogger(name).setLevel(database_level)
