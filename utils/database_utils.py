"""
========================================
SQLAlchemy bridge for rendered builders.
========================================

Builders render to '?' markers plus a positional value list. SQLAlchemy's
text() construct binds by name instead, so this module rewrites marker #i to
the named parameter :p<i> and binds value #i to it. Connections and
transactions stay with the caller.

Key Features:
    - Builder to TextClause conversion with bound parameters
    - Execution on a caller-supplied connection
    - Engine creation from core.config (DATABASE_URL)

Example:
    >>> from sqlalchemy import text
    >>> from sql import bulk_insert, Select, eq
    >>> from utils.database_utils import create_sqlalchemy_engine, execute_builder
    >>>
    >>> engine = create_sqlalchemy_engine('sqlite://')
    >>> with engine.begin() as conn:
    ...     conn.execute(text("CREATE TABLE tb (name TEXT, age INTEGER)"))
    ...     execute_builder(conn, bulk_insert('tb', [['ann', 31]], ['name', 'age']))
    ...     rows = execute_builder(conn, Select(table='tb', where=eq('age', 31))).fetchall()
"""

from typing import Dict, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine, Result
from sqlalchemy.sql.elements import TextClause

from core.config import config
from core.logger import get_logger
from sql.exceptions import BuilderMisuseError
from sql.fragment import PLACEHOLDER, ArgValue, Builder

logger = get_logger(__name__)

BIND_PREFIX = "p"


def to_named_params(builder: Builder) -> Tuple[str, Dict[str, ArgValue]]:
    """
    Render a builder with named bind parameters.

    Every '?' marker becomes :p0, :p1, ... in order. Colons already in the
    text are escaped so SQLAlchemy does not read them as parameters.

    Args:
        builder: Builder to render

    Returns:
        Tuple of (sql_text, params)

    Raises:
        BuilderMisuseError: If the marker count differs from the value count
    """
    query, args = builder.build()
    pieces = query.split(PLACEHOLDER)

    if len(pieces) - 1 != len(args):
        raise BuilderMisuseError(
            f"Rendered SQL has {len(pieces) - 1} markers but {len(args)} values: {query!r}"
        )

    params = {}
    sql = pieces[0].replace(":", "\\:")
    for index, (value, piece) in enumerate(zip(args, pieces[1:])):
        name = f"{BIND_PREFIX}{index}"
        params[name] = value
        sql += f":{name}" + piece.replace(":", "\\:")

    return sql, params


def to_text_clause(builder: Builder) -> TextClause:
    """
    Convert a builder into a SQLAlchemy TextClause with bound values.

    Args:
        builder: Builder to render

    Returns:
        TextClause ready for Connection.execute()
    """
    sql, params = to_named_params(builder)
    return text(sql).bindparams(**params)


def execute_builder(connection: Connection, builder: Builder) -> Result:
    """
    Execute a builder on an open SQLAlchemy connection.

    Args:
        connection: Caller-managed connection (transaction handling is theirs)
        builder: Statement builder

    Returns:
        SQLAlchemy Result
    """
    clause = to_text_clause(builder)
    logger.debug(f"Executing SQL: {clause.text}")
    return connection.execute(clause)


def create_sqlalchemy_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine.

    Args:
        url: Database URL (defaults to config.database_url)
        echo: Enable SQL statement logging (defaults to config.database_echo)

    Returns:
        SQLAlchemy Engine
    """
    url = url or config.database_url
    echo = config.database_echo if echo is None else echo

    engine = create_engine(url, echo=echo)
    # URL repr masks the password
    logger.debug(f"Created SQLAlchemy engine for {engine.url!r}")
    return engine
