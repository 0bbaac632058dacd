"""
======================================
Composable parameterized SQL builders.
======================================

This package builds SQL text out of small immutable builders. Rendering a
builder with build() returns (sql_text, args): one '?' marker per value in
args, in the same order, ready to be bound positionally by the database
driver.

The package follows a clear organization:
    - fragment.py: Builder base class, raw fragments and comparisons
    - conditions.py: AND / OR combinators with null elision
    - expressions.py: Alias, Bracket, In, Join, Case, Func, Comma, Embed
    - dml.py: VALUES / SET builders and INSERT / UPDATE / DELETE
    - query_builder.py: SELECT, UNION ALL and pagination
    - exceptions.py: validation and misuse errors

Architecture:
    - Builders never change after construction; build() is a pure function
    - Input is validated when a builder is created, never while rendering
    - Optional clauses set to None or to an empty And/Or are left out
    - Factory helpers use the '_builder' suffix (e.g. in_builder, join_builder)

Example:
    >>> from sql import And, Select, eq, in_builder
    >>>
    >>> query, args = Select(
    ...     table='tb',
    ...     fields=['name', 'age'],
    ...     where=And(in_builder('age', [1, 2, 3]), eq('name', 'bob')),
    ... ).build()
    >>> query
    'SELECT name,age FROM tb WHERE (age IN (?,?,?) AND name = ?)'
    >>> args
    [1, 2, 3, 'bob']
"""

__version__ = "1.0.0"
__all__ = [
    # Core
    'Builder', 'Fragment', 'PLACEHOLDER', 'raw', 'is_null', 'as_builder',
    'eq', 'nq', 'gt', 'gte', 'lt', 'lte',
    # Conditions
    'And', 'Or', 'where_builder',
    # Expressions
    'Alias', 'Bracket', 'In', 'Join', 'JoinType', 'Case', 'Func', 'Comma', 'Embed',
    'alias_builder', 'bracket_builder', 'in_builder', 'join_builder',
    'case_builder', 'func_builder', 'comma_builder', 'embed_builder',
    # DML
    'ValueRows', 'AssignmentSet', 'SortedAssignmentSet', 'Insert', 'Update', 'Delete',
    'values_builder', 'set_builder', 'bulk_insert', 'batch_update',
    # Queries
    'Select', 'SelectRaw', 'UnionAll', 'select_builder', 'union_all_builder',
    'pagination_builder',
    # Errors
    'SQLBuilderError', 'SQLValidationError', 'BuilderMisuseError',
]

from .conditions import And, Or, where_builder
from .dml import (
    AssignmentSet,
    Delete,
    Insert,
    SortedAssignmentSet,
    Update,
    ValueRows,
    batch_update,
    bulk_insert,
    set_builder,
    values_builder,
)
from .exceptions import BuilderMisuseError, SQLBuilderError, SQLValidationError
from .expressions import (
    Alias,
    Bracket,
    Case,
    Comma,
    Embed,
    Func,
    In,
    Join,
    JoinType,
    alias_builder,
    bracket_builder,
    case_builder,
    comma_builder,
    embed_builder,
    func_builder,
    in_builder,
    join_builder,
)
from .fragment import (
    PLACEHOLDER,
    Builder,
    Fragment,
    as_builder,
    eq,
    gt,
    gte,
    is_null,
    lt,
    lte,
    nq,
    raw,
)
from .query_builder import (
    Select,
    SelectRaw,
    UnionAll,
    pagination_builder,
    select_builder,
    union_all_builder,
)
