"""
==============================================
Configuration management for the SQL builders.
==============================================

Loads settings from environment variables (.env file) and provides a
centralized Config singleton for application-wide access.

The builders themselves have nothing to configure: the '?' marker and the
'$' Embed marker are fixed. Configuration covers the surrounding pieces:
- Logging level, file output and colors
- The database URL used by the SQLAlchemy bridge in utils.database_utils

Environment variables:
    SQL_LOG_LEVEL       Logging level (default: INFO)
    SQL_LOG_FILE        Log file name; no file output when unset
    SQL_LOG_DIR         Directory for the log file (default: logs)
    SQL_LOG_COLORS      Colored console output (default: true)
    SQL_LOG_AUTO_SETUP  Configure logging on import of core.logger (default: false)
    DATABASE_URL        SQLAlchemy database URL (default: sqlite://)
    DATABASE_ECHO       Echo SQL from the SQLAlchemy engine (default: false)

Example:
    >>> from core.config import config
    >>>
    >>> engine_url = config.database_url
    >>> print(f"Log level: {config.log_level}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class LoggingConfig:
    """Logging configuration settings.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name
        log_dir: Directory the log file is written to
        use_colors: Colorize console output
        auto_setup: Configure the root logger when core.logger is imported
    """

    level: str
    log_file: Optional[str]
    log_dir: Path
    use_colors: bool
    auto_setup: bool


@dataclass
class DatabaseConfig:
    """Database settings for the SQLAlchemy bridge.

    Attributes:
        url: SQLAlchemy database URL
        echo: Echo executed SQL from the engine
    """

    url: str
    echo: bool


class Config:
    """Centralized configuration manager.

    Attributes:
        logging: LoggingConfig instance
        db: DatabaseConfig instance

    Example:
        >>> config = Config()
        >>> config.database_url
        'sqlite://'
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        project_root = Path(__file__).parent.parent

        self.logging = LoggingConfig(
            level=os.getenv('SQL_LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('SQL_LOG_FILE') or None,
            log_dir=Path(os.getenv('SQL_LOG_DIR', str(project_root / 'logs'))),
            use_colors=_env_flag('SQL_LOG_COLORS', True),
            auto_setup=_env_flag('SQL_LOG_AUTO_SETUP', False)
        )

        self.db = DatabaseConfig(
            url=os.getenv('DATABASE_URL', 'sqlite://'),
            echo=_env_flag('DATABASE_ECHO', False)
        )

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self.logging.level

    @property
    def database_url(self) -> str:
        """Get SQLAlchemy database URL."""
        return self.db.url

    @property
    def database_echo(self) -> bool:
        """Get engine echo flag."""
        return self.db.echo


# Global configuration instance
config = Config()
