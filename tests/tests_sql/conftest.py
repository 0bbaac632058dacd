"""
Shared fixtures for the sql package tests.

Key fixtures:
- nested_filter: the OR/AND/IN condition reused across select tests
- inner_select: a SELECT over that filter, used as an aliased subquery
"""

import pytest

from sql.conditions import And, Or
from sql.expressions import in_builder
from sql.fragment import raw
from sql.query_builder import Select


@pytest.fixture
def nested_filter():
    """(c1=1 OR c2=? OR (c3=? AND c4=? AND c5 IN (?,?,?,?))) with args 2..8."""
    return Or(
        raw("c1=1"),
        raw("c2=?", 2),
        And(
            raw("c3=?", 3),
            raw("c4=?", 4),
            in_builder("c5", [5, 6, 7, 8]),
        ),
    )


@pytest.fixture
def inner_select(nested_filter):
    return Select(table="tab", fields=["a"], where=nested_filter)
