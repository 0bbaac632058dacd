"""
===============================
Structural expression builders.
===============================

Builders that wrap or combine other builders into a larger SQL expression.
Each class is an immutable node; the factory functions follow the project's
_builder naming convention and are the usual way to create them.

Builders:
- alias_builder: "<expr> AS name", parenthesizing computed expressions
- bracket_builder: "(<expr>)"
- in_builder: "col IN (?,?,...)"
- join_builder: "<left> [LEFT|RIGHT|CROSS] JOIN <right> [ON <cond>]"
- case_builder: "CASE [subject] WHEN .. THEN .. [ELSE ..] END"
- func_builder: "name(<arg>,<arg>,...)"
- comma_builder: "<expr>,<expr>,..."
- embed_builder: substitute builders into a template at each '$'

Usage:
    from sql.expressions import alias_builder, embed_builder, join_builder
    from sql.fragment import raw

    join = join_builder(
        "INNER",
        alias_builder(raw("users"), "u"),
        alias_builder(raw("orders"), "o"),
        raw("u.id = o.user_id"),
    )

    # Wrap pre-built expressions without recounting markers
    greatest = embed_builder("greatest($, $)", raw("?", 1), raw("score + ?", 2))
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from core.logger import get_logger
from sql.exceptions import BuilderMisuseError, SQLValidationError
from sql.fragment import PLACEHOLDER, ArgValue, Builder, BuildResult, is_null

logger = get_logger(__name__)

# Marker replaced by a substitute builder in Embed templates
EMBED_MARKER = "$"

_WHITESPACE = re.compile(r"\s")


def _build_all(builders: Sequence[Builder]) -> Tuple[List[str], list]:
    texts = []
    args = []
    for builder in builders:
        text, builder_args = builder.build()
        texts.append(text)
        args.extend(builder_args)
    return texts, args


@dataclass(frozen=True)
class Alias(Builder):
    """Child expression followed by AS name.

    Text containing whitespace is taken to be a computed expression or a
    subquery and is parenthesized first; a bare identifier is not.
    """

    child: Builder
    name: str

    def build(self) -> BuildResult:
        text, args = self.child.build()
        if _WHITESPACE.search(text):
            text = f"({text})"
        return f"{text} AS {self.name}", args


@dataclass(frozen=True)
class Bracket(Builder):
    child: Builder

    def build(self) -> BuildResult:
        text, args = self.child.build()
        return f"({text})", args


@dataclass(frozen=True)
class In(Builder):
    """Column membership test against a fixed list of values."""

    column: str
    values: Tuple[ArgValue, ...]

    def __post_init__(self):
        values = tuple(self.values)
        if not values:
            logger.debug("Rejected IN list for column %s: no values", self.column)
            raise SQLValidationError(
                f"IN list for column {self.column!r} has no values",
                kind="empty_in_list",
                detail={"column": self.column},
            )
        object.__setattr__(self, "values", values)

    def build(self) -> BuildResult:
        markers = ",".join([PLACEHOLDER] * len(self.values))
        return f"{self.column} IN ({markers})", list(self.values)


class JoinType(Enum):
    """Supported join kinds mapped to their SQL keyword."""

    INNER = "JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"
    CROSS = "CROSS JOIN"

    @classmethod
    def coerce(cls, kind: Union["JoinType", str]) -> "JoinType":
        """Resolve a JoinType member or its case-insensitive name.

        Raises:
            BuilderMisuseError: If kind names no supported join
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            member = cls.__members__.get(kind.strip().upper())
            if member is not None:
                return member
        raise BuilderMisuseError(f"Unknown join kind: {kind!r}")


@dataclass(frozen=True)
class Join(Builder):
    """Two table expressions joined with an optional ON condition."""

    kind: JoinType
    left: Builder
    right: Builder
    on: Optional[Builder] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", JoinType.coerce(self.kind))

    def build(self) -> BuildResult:
        left, args = self.left.build()
        right, right_args = self.right.build()
        args.extend(right_args)

        sql = f"{left} {self.kind.value} {right}"
        if not is_null(self.on):
            on, on_args = self.on.build()
            sql += f" ON {on}"
            args.extend(on_args)

        return sql, args


@dataclass(frozen=True)
class Case(Builder):
    """CASE expression, simple (with subject) or searched (without)."""

    whens: Tuple[Tuple[Builder, Builder], ...]
    subject: Optional[Builder] = None
    default: Optional[Builder] = None

    def __post_init__(self):
        whens = tuple((cond, result) for cond, result in self.whens)
        if not whens:
            logger.debug("Rejected CASE expression without WHEN branches")
            raise SQLValidationError("CASE expression needs at least one WHEN branch", kind="empty_case")
        object.__setattr__(self, "whens", whens)

    def build(self) -> BuildResult:
        parts = ["CASE"]
        args = []

        if self.subject is not None:
            text, subject_args = self.subject.build()
            parts.append(text)
            args.extend(subject_args)

        for cond, result in self.whens:
            cond_text, cond_args = cond.build()
            result_text, result_args = result.build()
            parts.append(f"WHEN {cond_text} THEN {result_text}")
            args.extend(cond_args)
            args.extend(result_args)

        if self.default is not None:
            text, default_args = self.default.build()
            parts.append(f"ELSE {text}")
            args.extend(default_args)

        parts.append("END")
        return " ".join(parts), args


@dataclass(frozen=True)
class Func(Builder):
    """Function call over argument expressions."""

    name: str
    args: Tuple[Builder, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def build(self) -> BuildResult:
        texts, args = _build_all(self.args)
        return f"{self.name}({','.join(texts)})", args


@dataclass(frozen=True)
class Comma(Builder):
    """Expressions joined by commas, without parentheses."""

    items: Tuple[Builder, ...]

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def build(self) -> BuildResult:
        texts, args = _build_all(self.items)
        return ",".join(texts), args


@dataclass(frozen=True)
class Embed(Builder):
    """SQL template whose '$' markers are filled by substitute builders.

    Markers are replaced left to right, one substitute each.
    """

    template: str
    substitutes: Tuple[Builder, ...]

    def __post_init__(self):
        substitutes = tuple(self.substitutes)
        markers = self.template.count(EMBED_MARKER)
        if markers != len(substitutes):
            raise BuilderMisuseError(
                f"Template {self.template!r} has {markers} '{EMBED_MARKER}' markers "
                f"but {len(substitutes)} substitutes were given"
            )
        object.__setattr__(self, "substitutes", substitutes)

    def build(self) -> BuildResult:
        pieces = self.template.split(EMBED_MARKER)
        texts, args = _build_all(self.substitutes)

        sql = pieces[0]
        for text, piece in zip(texts, pieces[1:]):
            sql += text + piece
        return sql, args


def alias_builder(child: Builder, alias: str) -> Alias:
    return Alias(child, alias)


def bracket_builder(child: Builder) -> Bracket:
    return Bracket(child)


def in_builder(column: str, values: Sequence[ArgValue]) -> In:
    """
    Build a "col IN (?,...)" condition.

    Args:
        column: Column name or expression
        values: Values to match; one marker is rendered per value

    Returns:
        In builder

    Raises:
        SQLValidationError: If values is empty
    """
    return In(column, tuple(values))


def join_builder(
    join_type: Union[JoinType, str],
    left: Builder,
    right: Builder,
    on: Optional[Builder] = None
) -> Join:
    """
    Build a JOIN between two table expressions.

    Args:
        join_type: JoinType member or its name (INNER, LEFT, RIGHT, CROSS)
        left: Left table expression
        right: Right table expression
        on: Optional join condition; omitted when None or empty

    Returns:
        Join builder

    Raises:
        BuilderMisuseError: If join_type is not a supported join kind
    """
    return Join(join_type, left, right, on)


def case_builder(
    whens: Sequence[Tuple[Builder, Builder]],
    subject: Optional[Builder] = None,
    default: Optional[Builder] = None
) -> Case:
    """
    Build a CASE expression.

    Args:
        whens: Ordered (condition, result) pairs
        subject: Expression compared against each condition (simple CASE)
        default: ELSE result

    Returns:
        Case builder
    """
    return Case(tuple(whens), subject, default)


def func_builder(name: str, *args: Builder) -> Func:
    return Func(name, args)


def comma_builder(*items: Builder) -> Comma:
    return Comma(items)


def embed_builder(template: str, *substitutes: Builder) -> Embed:
    """
    Substitute builders into a SQL template.

    Args:
        template: SQL text with one '$' per substitute
        *substitutes: Builders rendered into the markers, in order

    Returns:
        Embed builder

    Raises:
        BuilderMisuseError: If the marker count differs from the substitute count
    """
    return Embed(template, substitutes)
