"""
===========================
Boolean condition builders.
===========================

And and Or join child builders with a logical operator inside parentheses.
Children may be None or empty combinators; those are skipped without leaving
a dangling operator, which lets optional filters be composed without
special-casing their absence:

    >>> from sql.conditions import And, Or
    >>> from sql.fragment import eq
    >>>
    >>> name = None
    >>> cond = And(eq("age", 23), eq("name", name) if name else None, Or())
    >>> cond.build()
    ('(age = ?)', [23])

A combinator whose children are all null is itself empty. It still renders
"()" when built directly; statement composers check is_null() and drop the
clause instead.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from sql.exceptions import BuilderMisuseError
from sql.fragment import Builder, BuildResult, as_builder, is_null


@dataclass(frozen=True)
class _Junction(Builder):
    """Children joined by a logical operator."""

    children: Tuple[Optional[Builder], ...]

    operator = ""

    def __init__(self, *children: Optional[Builder]):
        object.__setattr__(self, "children", tuple(children))

    def is_empty(self) -> bool:
        return all(is_null(child) for child in self.children)

    def build(self) -> BuildResult:
        parts: List[str] = []
        args = []
        for child in self.children:
            if is_null(child):
                continue
            text, child_args = child.build()
            parts.append(text)
            args.extend(child_args)
        return "(" + f" {self.operator} ".join(parts) + ")", args


class And(_Junction):
    """Conjunction of child conditions."""

    operator = "AND"


class Or(_Junction):
    """Disjunction of child conditions."""

    operator = "OR"


_OPERATORS = {"AND": And, "OR": Or}


def where_builder(
    conditions: Iterable[Union[str, Builder, None]],
    operator: str = "AND"
) -> Union[And, Or]:
    """
    Build a condition from a list of conditions.

    Args:
        conditions: Builders, raw condition strings, or None (skipped)
        operator: Logical operator between conditions (AND, OR)

    Returns:
        And or Or builder; empty when every condition is None

    Raises:
        BuilderMisuseError: If operator is not AND or OR
    """
    junction = _OPERATORS.get(operator.strip().upper())
    if junction is None:
        raise BuilderMisuseError(f"Unknown logical operator: {operator!r}")

    return junction(*(None if c is None else as_builder(c) for c in conditions))
