"""
==========================
Utility Functions Package.
==========================

Bridges between rendered builders and the libraries around them.

Modules:
    database_utils: SQLAlchemy binding and execution of builders
    dataframe_utils: pandas DataFrame to VALUES rows
"""

__version__ = "1.0.0"
__all__ = [
    'to_named_params',
    'to_text_clause',
    'execute_builder',
    'create_sqlalchemy_engine',
]

from .database_utils import (
    create_sqlalchemy_engine,
    execute_builder,
    to_named_params,
    to_text_clause,
)
