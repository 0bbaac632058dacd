"""
==========================================
Data Manipulation Language (DML) builders.
==========================================

This module provides the VALUES and SET clause builders and the INSERT,
UPDATE and DELETE statement composers. Every statement renders with '?'
markers and returns its values in marker order.

Builders:
- ValueRows / values_builder: "(cols) VALUES (?,?),(?,?)" from rectangular rows
- SortedAssignmentSet / AssignmentSet / set_builder: "col=?,col=?" from a mapping
- Insert, Update, Delete: full statements
- bulk_insert, batch_update: one-call shortcuts for the common cases

Usage:
    from sql.dml import Delete, batch_update, bulk_insert
    from sql.fragment import eq

    insert_sql, insert_args = bulk_insert(
        table='customers',
        columns=['customer_id', 'customer_name'],
        rows=[[1, 'Ada'], [2, 'Grace']],
    ).build()
    # INSERT INTO customers (customer_id,customer_name) VALUES (?,?),(?,?)

    update_sql, update_args = batch_update(
        table='customers',
        values={'customer_name': 'Ada L.'},
        where=eq('customer_id', 1),
    ).build()
    # UPDATE customers SET customer_name=? WHERE customer_id = ?

Column order in SET clauses:
    SortedAssignmentSet (the set_builder default) renders columns in
    ascending name order, so equal mappings always produce identical text.
    AssignmentSet follows the mapping's own iteration order, which for a
    dict is insertion order: two equal dicts built in different orders
    render differently. Use it only for one-shot execution, never where the
    text is compared, cached or logged for diffing.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple, Union

from core.logger import get_logger
from sql.exceptions import SQLValidationError
from sql.fragment import (
    PLACEHOLDER,
    ArgValue,
    Builder,
    BuildResult,
    as_builder,
    as_optional_builder,
    is_null,
)

logger = get_logger(__name__)


def _invalid(message: str, kind: str, **detail) -> SQLValidationError:
    logger.debug("Validation failed (%s): %s", kind, message)
    return SQLValidationError(message, kind=kind, detail=detail)


@dataclass(frozen=True)
class ValueRows(Builder):
    """VALUES clause over rectangular row data.

    Attributes:
        rows: Row values; every row has the same length
        columns: Optional column names rendered before VALUES
    """

    rows: Tuple[Tuple[ArgValue, ...], ...]
    columns: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        rows = tuple(tuple(row) for row in self.rows)
        columns = None if self.columns is None else tuple(self.columns)

        if not rows or not rows[0]:
            raise _invalid("VALUES clause needs at least one non-empty row", "empty_rows")

        width = len(rows[0])
        if columns is not None and len(columns) != width:
            raise _invalid(
                f"{len(columns)} columns given for rows of {width} values",
                "column_mismatch",
                columns=len(columns),
                row_length=width,
            )

        for index, row in enumerate(rows):
            if len(row) != width:
                raise _invalid(
                    f"Row {index} has {len(row)} values, expected {width}",
                    "row_length_mismatch",
                    row=index,
                    row_length=len(row),
                    expected=width,
                )

        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "columns", columns)

    def build(self) -> BuildResult:
        group = "(" + ",".join([PLACEHOLDER] * len(self.rows[0])) + ")"
        sql = "VALUES " + ",".join([group] * len(self.rows))
        if self.columns:
            sql = "(" + ",".join(self.columns) + ") " + sql

        args = []
        for row in self.rows:
            args.extend(row)
        return sql, args


@dataclass(frozen=True)
class AssignmentSet(Builder):
    """SET assignments in the mapping's iteration order.

    The mapping is copied at construction; later changes to it are not seen.
    """

    assignments: Tuple[Tuple[str, ArgValue], ...]

    def __init__(self, values: Mapping[str, ArgValue]):
        object.__setattr__(self, "assignments", self._order(values))

    @staticmethod
    def _order(values: Mapping[str, ArgValue]) -> Tuple[Tuple[str, ArgValue], ...]:
        return tuple(values.items())

    def is_empty(self) -> bool:
        return not self.assignments

    def build(self) -> BuildResult:
        sql = ",".join(f"{column}={PLACEHOLDER}" for column, _ in self.assignments)
        return sql, [value for _, value in self.assignments]


class SortedAssignmentSet(AssignmentSet):
    """SET assignments in ascending column-name order."""

    @staticmethod
    def _order(values: Mapping[str, ArgValue]) -> Tuple[Tuple[str, ArgValue], ...]:
        return tuple((column, values[column]) for column in sorted(values))


@dataclass(frozen=True)
class Insert(Builder):
    """INSERT INTO <table> <values>."""

    table: Builder
    values: Builder

    def __post_init__(self):
        values = as_optional_builder(self.values)
        if is_null(values):
            raise _invalid("INSERT needs a VALUES clause", "missing_values")
        object.__setattr__(self, "table", as_builder(self.table))
        object.__setattr__(self, "values", values)

    def build(self) -> BuildResult:
        table, args = self.table.build()
        values, value_args = self.values.build()
        args.extend(value_args)
        return f"INSERT INTO {table} {values}", args


@dataclass(frozen=True)
class Update(Builder):
    """UPDATE <table> SET <assignments> [WHERE <cond>].

    The SET clause is mandatory; WHERE is dropped when null.
    """

    table: Builder
    set: Builder
    where: Optional[Builder] = None

    def __post_init__(self):
        assignments = as_optional_builder(self.set)
        if is_null(assignments):
            raise _invalid("UPDATE needs at least one assignment", "missing_assignments")
        object.__setattr__(self, "table", as_builder(self.table))
        object.__setattr__(self, "set", assignments)
        object.__setattr__(self, "where", as_optional_builder(self.where))

    def build(self) -> BuildResult:
        table, args = self.table.build()
        assignments, set_args = self.set.build()
        args.extend(set_args)

        sql = f"UPDATE {table} SET {assignments}"
        if not is_null(self.where):
            where, where_args = self.where.build()
            sql += f" WHERE {where}"
            args.extend(where_args)

        return sql, args


@dataclass(frozen=True)
class Delete(Builder):
    """DELETE FROM <table> [WHERE <cond>]."""

    table: Builder
    where: Optional[Builder] = None

    def __post_init__(self):
        object.__setattr__(self, "table", as_builder(self.table))
        object.__setattr__(self, "where", as_optional_builder(self.where))

    def build(self) -> BuildResult:
        table, args = self.table.build()

        sql = f"DELETE FROM {table}"
        if not is_null(self.where):
            where, where_args = self.where.build()
            sql += f" WHERE {where}"
            args.extend(where_args)

        return sql, args


def values_builder(
    rows: Sequence[Sequence[ArgValue]],
    columns: Optional[Sequence[str]] = None
) -> ValueRows:
    """
    Build a VALUES clause from row data.

    Args:
        rows: Rectangular row data, at least one non-empty row
        columns: Optional column names; must match the row length

    Returns:
        ValueRows builder

    Raises:
        SQLValidationError: On empty rows, ragged rows or a column count mismatch
    """
    return ValueRows(tuple(tuple(row) for row in rows), None if columns is None else tuple(columns))


def set_builder(values: Mapping[str, ArgValue], sort: bool = True) -> AssignmentSet:
    """
    Build SET assignments from a column -> value mapping.

    Args:
        values: Columns and the values to assign
        sort: Render columns in name order (deterministic). With False the
            mapping's iteration order is used.

    Returns:
        SortedAssignmentSet, or AssignmentSet when sort is False
    """
    if sort:
        return SortedAssignmentSet(values)
    return AssignmentSet(values)


def bulk_insert(
    table: Union[str, Builder],
    rows: Sequence[Sequence[ArgValue]],
    columns: Optional[Sequence[str]] = None
) -> Insert:
    """
    Build a multi-row INSERT statement.

    Args:
        table: Table name or table builder
        rows: Row data, one marker group per row
        columns: Optional column names

    Returns:
        Insert builder
    """
    return Insert(table, values_builder(rows, columns))


def batch_update(
    table: Union[str, Builder],
    values: Mapping[str, ArgValue],
    where: Optional[Builder] = None
) -> Update:
    """
    Build an UPDATE statement with deterministic column order.

    Args:
        table: Table name or table builder
        values: Columns and the values to assign
        where: Optional condition; omitted when null

    Returns:
        Update builder

    Raises:
        SQLValidationError: If values is empty
    """
    return Update(table, SortedAssignmentSet(values), where)
