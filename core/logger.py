"""
================================================
Centralized logging for the SQL builder package.
================================================

Provides consistent logging setup across all modules with:
- Console output, optionally colorized
- Optional UTF-8 file output
- Module-specific loggers

Builders log validation failures at DEBUG; the SQLAlchemy bridge logs the
SQL it executes at DEBUG. Nothing is configured on import unless
SQL_LOG_AUTO_SETUP is set, so applications keep control of their handlers.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> # Setup logging at application start
    >>> setup_logging(log_level='DEBUG', log_file='sql.log')
    >>>
    >>> # Get module logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendered query")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from core.config import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter adding ANSI colors to the level name for console output.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Color a copy so other handlers see the plain level name
        levelname = record.levelname
        if levelname not in self.COLORS:
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(colored)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    console_output: bool = True,
    use_colors: Optional[bool] = None
) -> None:
    """Configure the root logger with console and/or file handlers.

    Arguments left as None fall back to core.config. Existing root handlers
    are replaced, so calling this twice does not duplicate output.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'sql.log')
        log_dir: Directory for the log file
        console_output: If True, output to console (stdout)
        use_colors: If True, use colored output for console

    Example:
        >>> setup_logging(log_level='DEBUG', log_file='sql.log', log_dir='logs')
    """
    level = getattr(logging, (log_level or config.log_level).upper())
    log_file = log_file if log_file is not None else config.logging.log_file
    use_colors = config.logging.use_colors if use_colors is None else use_colors

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        formatter_class = ColoredFormatter if use_colors else logging.Formatter
        console_handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir is not None else config.logging.log_dir
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)


def _init_default_logging():
    """Apply setup_logging() on import when SQL_LOG_AUTO_SETUP is enabled."""
    if config.logging.auto_setup and not logging.getLogger().handlers:
        setup_logging()


_init_default_logging()
