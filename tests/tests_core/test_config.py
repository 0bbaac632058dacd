"""
=============================================
Pytest suite for core/config.py
=============================================

Test Coverage:
--------------
- Defaults when no variables are set
- Environment overrides for logging and database settings
- Boolean flag parsing
- Convenience properties

How to Execute:
---------------
All tests:          pytest tests/tests_core/test_config.py -v
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from core.config import Config, DatabaseConfig, LoggingConfig, _env_flag

CONFIG_VARS = (
    "SQL_LOG_LEVEL",
    "SQL_LOG_FILE",
    "SQL_LOG_DIR",
    "SQL_LOG_COLORS",
    "SQL_LOG_AUTO_SETUP",
    "DATABASE_URL",
    "DATABASE_ECHO",
)


@pytest.fixture
def clean_env():
    """Environment with none of the package variables set."""
    env = {key: value for key, value in os.environ.items() if key not in CONFIG_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_defaults(clean_env):
    cfg = Config()

    assert isinstance(cfg.logging, LoggingConfig)
    assert isinstance(cfg.db, DatabaseConfig)
    assert cfg.log_level == "INFO"
    assert cfg.logging.log_file is None
    assert cfg.logging.log_dir.name == "logs"
    assert cfg.logging.use_colors is True
    assert cfg.logging.auto_setup is False
    assert cfg.database_url == "sqlite://"
    assert cfg.database_echo is False


@pytest.mark.unit
def test_environment_overrides(clean_env, tmp_path):
    overrides = {
        "SQL_LOG_LEVEL": "debug",
        "SQL_LOG_FILE": "sql.log",
        "SQL_LOG_DIR": str(tmp_path),
        "SQL_LOG_COLORS": "false",
        "SQL_LOG_AUTO_SETUP": "yes",
        "DATABASE_URL": "postgresql://user@localhost/warehouse",
        "DATABASE_ECHO": "1",
    }
    with patch.dict(os.environ, overrides):
        cfg = Config()

    assert cfg.log_level == "DEBUG"
    assert cfg.logging.log_file == "sql.log"
    assert cfg.logging.log_dir == Path(tmp_path)
    assert cfg.logging.use_colors is False
    assert cfg.logging.auto_setup is True
    assert cfg.database_url == "postgresql://user@localhost/warehouse"
    assert cfg.database_echo is True


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [
    ("1", True), ("true", True), ("TRUE", True), (" yes ", True), ("on", True),
    ("0", False), ("false", False), ("no", False), ("", False), ("maybe", False),
])
def test_env_flag_parsing(clean_env, raw, expected):
    with patch.dict(os.environ, {"SQL_TEST_FLAG": raw}):
        assert _env_flag("SQL_TEST_FLAG", not expected) is expected


@pytest.mark.unit
@pytest.mark.parametrize("default", [True, False])
def test_env_flag_default_when_unset(clean_env, default):
    assert _env_flag("SQL_TEST_FLAG_UNSET", default) is default


# ===================
# 2. EDGE CASE TESTS
# ===================

@pytest.mark.edge_case
def test_empty_log_file_means_no_file(clean_env):
    with patch.dict(os.environ, {"SQL_LOG_FILE": ""}):
        assert Config().logging.log_file is None
