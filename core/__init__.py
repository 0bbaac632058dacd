"""
=================================================
Core infrastructure package for the SQL builders.
=================================================

This package provides centralized configuration management and logging
infrastructure used throughout the project.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Database URL: {config.database_url}")
"""

__version__ = "1.0.0"
__all__ = ['get_logger', 'setup_logging', 'ColoredFormatter', 'config', 'Config']

from core.config import Config, config
from core.logger import ColoredFormatter, get_logger, setup_logging
