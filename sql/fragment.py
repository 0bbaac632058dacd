"""
===============================
Builder base and SQL fragments.
===============================

Every node of a query tree is a Builder. Calling build() on a node returns
the rendered SQL text together with the ordered list of values that must be
bound to its '?' markers, left to right. Parents render their children and
stitch both halves together, so the marker count and the argument list can
never drift apart.

Fragment is the leaf: literal SQL text plus the values for the markers it
contains. It doubles as the escape hatch for raw SQL.

Functions:
- raw: Build a Fragment from text and positional values
- eq, nq, gt, gte, lt, lte: Single-column comparisons ("col OP ?")
- as_builder: Lower a table/column string to a Fragment
- is_null: Check whether an optional builder should be omitted

Example:
    >>> from sql.fragment import eq, raw
    >>>
    >>> eq("age", 23).build()
    ('age = ?', [23])
    >>> raw("score BETWEEN ? AND ?", 10, 20).build()
    ('score BETWEEN ? AND ?', [10, 20])
"""

import datetime
import decimal
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from sql.exceptions import BuilderMisuseError

# Marker standing for one positional argument in rendered text
PLACEHOLDER = "?"

# Scalar kinds accepted by the execution layer
ArgValue = Union[
    None,
    bool,
    int,
    float,
    str,
    bytes,
    decimal.Decimal,
    datetime.date,
    datetime.datetime,
    datetime.time,
]

BuildResult = Tuple[str, List[ArgValue]]


class Builder(ABC):
    """A node that renders to SQL text and its ordered bound values."""

    __slots__ = ()

    @abstractmethod
    def build(self) -> BuildResult:
        """Render the node.

        Returns:
            Tuple of (sql_text, args) where args holds one value per '?'
            marker in sql_text, in marker order. The list is freshly
            allocated on every call.
        """

    def is_empty(self) -> bool:
        """Whether the node stands for an absent clause.

        Only combinators that can end up with nothing to render override this.
        """
        return False


def is_null(builder: Optional[Builder]) -> bool:
    """Return True if an optional clause builder should be left out."""
    return builder is None or builder.is_empty()


@dataclass(frozen=True)
class Fragment(Builder):
    """Literal SQL text with the values for its markers.

    The marker count is not checked against args here; statement-level
    helpers validate their own input.
    """

    text: str
    args: Tuple[ArgValue, ...] = ()

    def __post_init__(self):
        # Accept any sequence but keep an immutable copy
        object.__setattr__(self, "args", tuple(self.args))

    def build(self) -> BuildResult:
        return self.text, list(self.args)


def raw(text: str, *args: ArgValue) -> Fragment:
    """Build a Fragment from SQL text and positional values."""
    return Fragment(text, args)


def as_builder(value: Union[str, Builder]) -> Builder:
    """Lower a plain string to an argument-free Fragment.

    Args:
        value: Table name, column list, or an existing builder

    Returns:
        A Builder

    Raises:
        BuilderMisuseError: If value is neither a string nor a Builder
    """
    if isinstance(value, Builder):
        return value
    if isinstance(value, str):
        return Fragment(value)
    raise BuilderMisuseError(f"Expected str or Builder, got {type(value).__name__}")


def as_optional_builder(value: Union[str, Builder, None]) -> Optional[Builder]:
    """Like as_builder, but passes None through for optional clauses."""
    return None if value is None else as_builder(value)


def _compare(column: str, operator: str, value: Any) -> Fragment:
    return Fragment(f"{column} {operator} {PLACEHOLDER}", (value,))


def eq(column: str, value: ArgValue) -> Fragment:
    return _compare(column, "=", value)


def nq(column: str, value: ArgValue) -> Fragment:
    return _compare(column, "<>", value)


def gt(column: str, value: ArgValue) -> Fragment:
    return _compare(column, ">", value)


def gte(column: str, value: ArgValue) -> Fragment:
    return _compare(column, ">=", value)


def lt(column: str, value: ArgValue) -> Fragment:
    return _compare(column, "<", value)


def lte(column: str, value: ArgValue) -> Fragment:
    return _compare(column, "<=", value)
