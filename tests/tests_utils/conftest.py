"""
Shared fixtures for the utils package tests.

Key fixtures:
- sqlite_engine: in-memory SQLite engine created through create_sqlalchemy_engine
- people_connection: open transaction on that engine with a populated 'people' table
"""

import pytest
from sqlalchemy import text

from utils.database_utils import create_sqlalchemy_engine


@pytest.fixture
def sqlite_engine():
    engine = create_sqlalchemy_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def people_connection(sqlite_engine):
    """Connection with people(name, age, city) holding three rows."""
    with sqlite_engine.begin() as conn:
        conn.execute(text("CREATE TABLE people (name TEXT, age INTEGER, city TEXT)"))
        conn.execute(
            text("INSERT INTO people VALUES ('ann', 31, 'Oslo'), ('bob', 25, 'Lima'), ('cy', 47, NULL)")
        )
        yield conn
