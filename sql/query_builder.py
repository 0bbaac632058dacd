"""
============================
SQL Query Builder Utilities.
============================

This module provides the SELECT statement composers.

Builders:
- SelectRaw: SELECT with every clause given as a builder
- Select / select_builder: SELECT from plain column names, table names and
  numeric limits, lowered to SelectRaw
- UnionAll: member SELECTs joined with UNION ALL
- pagination_builder: (offset, count) pair for a 1-based page

Clauses always render in this order, each only when present and not null:

    SELECT [DISTINCT] <fields> FROM <table> [WHERE ..] [GROUP BY ..]
        [HAVING ..] [ORDER BY ..] [LIMIT ?|?,?]

Values are collected in the same order, so a SELECT used as an aliased
subquery keeps its markers and values aligned inside the outer statement.

Usage:
    from sql.conditions import And
    from sql.expressions import alias_builder, in_builder
    from sql.fragment import gt
    from sql.query_builder import Select, pagination_builder

    inner = Select(table='orders', fields=['customer_id', 'total'],
                   where=in_builder('status', ['paid', 'shipped']))

    query, args = Select(
        table=alias_builder(inner, 'o'),
        where=And(gt('o.total', 100)),
        order_by=['o.total DESC'],
        limit=pagination_builder(page=2, page_size=50),
    ).build()
    # SELECT * FROM (SELECT customer_id,total FROM orders WHERE status IN (?,?)) AS o
    #   WHERE (o.total > ?) ORDER BY o.total DESC LIMIT ?,?
    # args: ['paid', 'shipped', 100, 50, 50]
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from core.logger import get_logger
from sql.exceptions import SQLValidationError
from sql.fragment import (
    PLACEHOLDER,
    Builder,
    BuildResult,
    Fragment,
    as_builder,
    as_optional_builder,
    is_null,
)

logger = get_logger(__name__)

Names = Union[str, Sequence[str], Builder, None]
Limit = Union[int, Sequence[int], None]


@dataclass(frozen=True)
class SelectRaw(Builder):
    """SELECT statement whose clauses are all builders.

    Attributes:
        fields: Select list
        table: FROM expression (table, join or aliased subquery)
        where: WHERE condition; a blank string is treated as absent
        group_by: GROUP BY expression list
        having: HAVING condition
        order_by: ORDER BY expression list
        limit: LIMIT expression, normally "?" or "?,?"
        distinct: Use SELECT DISTINCT
    """

    fields: Builder
    table: Builder
    where: Optional[Builder] = None
    group_by: Optional[Builder] = None
    having: Optional[Builder] = None
    order_by: Optional[Builder] = None
    limit: Optional[Builder] = None
    distinct: bool = False

    def __post_init__(self):
        object.__setattr__(self, "fields", as_builder(self.fields))
        object.__setattr__(self, "table", as_builder(self.table))
        for name in ("where", "group_by", "having", "order_by", "limit"):
            object.__setattr__(self, name, _optional(getattr(self, name)))

    def build(self) -> BuildResult:
        fields, args = self.fields.build()
        table, table_args = self.table.build()
        args.extend(table_args)

        keyword = "SELECT DISTINCT" if self.distinct else "SELECT"
        parts = [f"{keyword} {fields} FROM {table}"]

        for clause, builder in (
            ("WHERE", self.where),
            ("GROUP BY", self.group_by),
            ("HAVING", self.having),
            ("ORDER BY", self.order_by),
            ("LIMIT", self.limit),
        ):
            if is_null(builder):
                continue
            text, clause_args = builder.build()
            parts.append(f"{clause} {text}")
            args.extend(clause_args)

        return " ".join(parts), args


def _optional(value: Union[str, Builder, None]) -> Optional[Builder]:
    # Blank strings stand for an absent clause
    if isinstance(value, str) and not value.strip():
        return None
    return as_optional_builder(value)


def _names(value: Names) -> Optional[Builder]:
    if value is None or isinstance(value, (str, Builder)):
        return _optional(value)
    return Fragment(",".join(value)) if value else None


def _limit(value: Limit) -> Optional[Builder]:
    if value is None or (isinstance(value, (list, tuple)) and not value):
        return None

    counts = tuple(value) if isinstance(value, (list, tuple)) else (value,)
    if len(counts) not in (1, 2) or any(
        isinstance(n, bool) or not isinstance(n, int) or n < 0 for n in counts
    ):
        logger.debug("Rejected LIMIT value %r", value)
        raise SQLValidationError(
            f"LIMIT takes a row count or an (offset, count) pair of non-negative integers, got {value!r}",
            kind="invalid_limit",
            detail={"limit": value},
        )

    return Fragment(",".join([PLACEHOLDER] * len(counts)), counts)


@dataclass(frozen=True)
class Select(Builder):
    """SELECT statement built from plain names.

    Attributes:
        table: Table name or FROM builder
        fields: Column names, a select-list string, or a builder; '*' when empty
        where: WHERE condition; a blank string is treated as absent
        group_by: Column names, a string, or a builder
        having: HAVING condition
        order_by: Order expressions, a string, or a builder
        limit: Row count, or an (offset, count) pair; rendered as markers,
            omitted when None or an empty sequence
        distinct: Use SELECT DISTINCT
    """

    table: Union[str, Builder]
    fields: Names = None
    where: Union[str, Builder, None] = None
    group_by: Names = None
    having: Union[str, Builder, None] = None
    order_by: Names = None
    limit: Limit = None
    distinct: bool = False

    def __post_init__(self):
        for name in ("fields", "group_by", "order_by"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, (str, Builder)):
                object.__setattr__(self, name, tuple(value))
        if isinstance(self.limit, list):
            object.__setattr__(self, "limit", tuple(self.limit))
        # Reject bad input now rather than on the first build()
        self.to_raw()

    def to_raw(self) -> SelectRaw:
        """Lower to the equivalent SelectRaw."""
        fields = _names(self.fields)
        return SelectRaw(
            fields=Fragment("*") if is_null(fields) else fields,
            table=self.table,
            where=self.where,
            group_by=_names(self.group_by),
            having=self.having,
            order_by=_names(self.order_by),
            limit=_limit(self.limit),
            distinct=self.distinct,
        )

    def build(self) -> BuildResult:
        return self.to_raw().build()


@dataclass(frozen=True)
class UnionAll(Builder):
    """Member queries joined with UNION ALL."""

    selects: Tuple[Builder, ...]

    def __post_init__(self):
        selects = tuple(self.selects)
        if not selects:
            logger.debug("Rejected UNION ALL without members")
            raise SQLValidationError("UNION ALL needs at least one SELECT", kind="empty_union")
        object.__setattr__(self, "selects", selects)

    def build(self) -> BuildResult:
        texts = []
        args = []
        for select in self.selects:
            text, select_args = select.build()
            texts.append(text)
            args.extend(select_args)
        return " UNION ALL ".join(texts), args


def select_builder(
    table: Union[str, Builder],
    columns: Names = None,
    where: Union[str, Builder, None] = None,
    group_by: Names = None,
    having: Union[str, Builder, None] = None,
    order_by: Names = None,
    limit: Limit = None,
    distinct: bool = False
) -> Select:
    """
    Build a SELECT statement.

    Args:
        table: Table name or FROM builder (join, aliased subquery)
        columns: Column list, select-list string or builder; "*" when omitted
        where: WHERE condition; omitted when None or empty
        group_by: GROUP BY columns
        having: HAVING condition; omitted when None or empty
        order_by: ORDER BY expressions
        limit: Row count, or (offset, count)
        distinct: Use SELECT DISTINCT

    Returns:
        Select builder

    Raises:
        SQLValidationError: If limit is malformed
    """
    return Select(
        table=table,
        fields=columns,
        where=where,
        group_by=group_by,
        having=having,
        order_by=order_by,
        limit=limit,
        distinct=distinct,
    )


def union_all_builder(*selects: Builder) -> UnionAll:
    return UnionAll(selects)


def pagination_builder(page: int, page_size: int) -> Tuple[int, int]:
    """
    Calculate the LIMIT pair for a page.

    Args:
        page: Page number (1-based)
        page_size: Number of records per page

    Returns:
        (offset, count) tuple for Select(limit=...)

    Raises:
        SQLValidationError: If page or page_size is below 1
    """
    if page < 1 or page_size < 1:
        raise SQLValidationError(
            f"Page and page size must be positive, got page={page}, page_size={page_size}",
            kind="invalid_page",
            detail={"page": page, "page_size": page_size},
        )
    return (page - 1) * page_size, page_size
