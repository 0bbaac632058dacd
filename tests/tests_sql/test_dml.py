"""
=============================================
Pytest suite for sql/dml.py
=============================================

Test Coverage:
--------------
- ValueRows: rendering with and without columns, validation errors
- AssignmentSet / SortedAssignmentSet: ordering and determinism
- Insert / Update / Delete: clause order, argument order, null elision
- bulk_insert / batch_update shortcuts

How to Execute:
---------------
All tests:          pytest tests/tests_sql/test_dml.py -v
By category:        pytest tests/tests_sql/test_dml.py -m "unit or edge_case"
"""

import pytest

from sql.conditions import And
from sql.dml import (
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
from sql.exceptions import SQLValidationError
from sql.expressions import in_builder
from sql.fragment import eq, raw

# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_insert_with_columns():
    query, args = Insert(raw("tb"), values_builder([[23, "bar"]], ["age", "foo"])).build()

    assert query == "INSERT INTO tb (age,foo) VALUES (?,?)"
    assert args == [23, "bar"]


@pytest.mark.unit
def test_insert_multiple_rows_without_columns(assert_parity):
    query, args = Insert("tab", values_builder([["a", 1], ["b", 2]])).build()

    assert query == "INSERT INTO tab VALUES (?,?),(?,?)"
    assert args == ["a", 1, "b", 2]
    assert_parity(query, args)


@pytest.mark.unit
def test_value_rows_accepts_tuples_and_generators():
    rows = ValueRows(((1, 2),), columns=iter(["a", "b"]))

    assert rows.columns == ("a", "b")
    assert rows.build() == ("(a,b) VALUES (?,?)", [1, 2])


@pytest.mark.unit
def test_unordered_set_follows_mapping_order():
    assert AssignmentSet({"score": "010", "district": 50}).build() == (
        "score=?,district=?",
        ["010", 50],
    )


@pytest.mark.unit
def test_sorted_set_orders_by_column():
    assert SortedAssignmentSet({"score": "010", "district": 50}).build() == (
        "district=?,score=?",
        [50, "010"],
    )


@pytest.mark.unit
def test_sorted_set_is_deterministic():
    first = {"district": 50, "score": "010", "age": 3}
    second = {"age": 3, "score": "010", "district": 50}

    assert SortedAssignmentSet(first).build() == SortedAssignmentSet(second).build()
    assert AssignmentSet(first).build() != AssignmentSet(second).build()


@pytest.mark.unit
def test_set_builder_sorts_by_default():
    assert isinstance(set_builder({"a": 1}), SortedAssignmentSet)
    assert type(set_builder({"a": 1}, sort=False)) is AssignmentSet


@pytest.mark.unit
def test_assignment_set_snapshots_mapping():
    values = {"a": 1}
    assignments = AssignmentSet(values)
    values["b"] = 2

    assert assignments.build() == ("a=?", [1])


@pytest.mark.unit
@pytest.mark.parametrize("set_class", [AssignmentSet, SortedAssignmentSet])
def test_update_with_assignment_sets(set_class):
    update = Update(
        raw("tb"),
        set_class({"district": 50, "score": "010"}),
        And(
            raw("foo = ?", "bar"),
            raw("age >= ?", 23),
            in_builder("sex", ["male", "female"]),
        ),
    )

    query, args = update.build()

    assert query == "UPDATE tb SET district=?,score=? WHERE (foo = ? AND age >= ? AND sex IN (?,?))"
    assert args == [50, "010", "bar", 23, "male", "female"]


@pytest.mark.unit
def test_update_with_raw_assignment():
    query, args = Update(raw("tab"), raw("a = a + ?", 1), raw("id = ?", 50)).build()

    assert query == "UPDATE tab SET a = a + ? WHERE id = ?"
    assert args == [1, 50]


@pytest.mark.unit
def test_update_omits_null_where():
    assert Update("tb", set_builder({"a": 1}), And(None)).build() == ("UPDATE tb SET a=?", [1])


@pytest.mark.unit
def test_delete_with_conditions():
    delete = Delete(
        raw("tb"),
        And(
            in_builder("hobby", ["soccer", "basketball", "tenis"]),
            in_builder("sex", ["male", "female"]),
            raw("age >= ?", 21),
        ),
    )

    query, args = delete.build()

    assert query == "DELETE FROM tb WHERE (hobby IN (?,?,?) AND sex IN (?,?) AND age >= ?)"
    assert args == ["soccer", "basketball", "tenis", "male", "female", 21]


@pytest.mark.unit
def test_delete_with_raw_where():
    assert Delete(raw("tab"), raw("id = ?", 50)).build() == ("DELETE FROM tab WHERE id = ?", [50])


@pytest.mark.unit
def test_delete_without_where():
    assert Delete("tab").build() == ("DELETE FROM tab", [])
    assert Delete("tab", And()).build() == ("DELETE FROM tab", [])


@pytest.mark.unit
def test_bulk_insert():
    query, args = bulk_insert("customers", [[1, "Ada"], [2, "Grace"]], ["id", "name"]).build()

    assert query == "INSERT INTO customers (id,name) VALUES (?,?),(?,?)"
    assert args == [1, "Ada", 2, "Grace"]


@pytest.mark.unit
def test_batch_update_is_sorted():
    query, args = batch_update("customers", {"name": "Ada", "active": True}, eq("id", 1)).build()

    assert query == "UPDATE customers SET active=?,name=? WHERE id = ?"
    assert args == [True, "Ada", 1]


# ===================
# 2. EDGE CASE TESTS
# ===================

@pytest.mark.edge_case
@pytest.mark.parametrize("rows", [[], [[]], ()])
def test_values_rejects_empty_rows(rows):
    with pytest.raises(SQLValidationError) as exc_info:
        values_builder(rows)

    assert exc_info.value.kind == "empty_rows"


@pytest.mark.edge_case
def test_values_rejects_column_count_mismatch():
    with pytest.raises(SQLValidationError) as exc_info:
        values_builder([[1, 2]], ["a"])

    assert exc_info.value.kind == "column_mismatch"
    assert exc_info.value.detail == {"columns": 1, "row_length": 2}


@pytest.mark.edge_case
def test_values_rejects_empty_column_list():
    with pytest.raises(SQLValidationError) as exc_info:
        values_builder([[1]], [])

    assert exc_info.value.kind == "column_mismatch"


@pytest.mark.edge_case
@pytest.mark.parametrize("ragged", [[[1, 2], [3]], [[1, 2], [3, 4], [5, 6, 7]]])
def test_values_rejects_ragged_rows(ragged):
    with pytest.raises(SQLValidationError) as exc_info:
        values_builder(ragged)

    assert exc_info.value.kind == "row_length_mismatch"
    assert exc_info.value.detail["row"] == len(ragged) - 1
    assert exc_info.value.detail["expected"] == 2


@pytest.mark.edge_case
@pytest.mark.parametrize("assignments", [None, AssignmentSet({}), SortedAssignmentSet({}), And()])
def test_update_requires_assignments(assignments):
    with pytest.raises(SQLValidationError) as exc_info:
        Update("tb", assignments)

    assert exc_info.value.kind == "missing_assignments"


@pytest.mark.edge_case
def test_insert_requires_values():
    with pytest.raises(SQLValidationError) as exc_info:
        Insert("tb", None)

    assert exc_info.value.kind == "missing_values"


@pytest.mark.edge_case
def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        values_builder([[1], [1, 2]])


@pytest.mark.edge_case
def test_empty_assignment_set_is_empty():
    assert AssignmentSet({}).is_empty()
    assert not AssignmentSet({"a": None}).is_empty()
    assert AssignmentSet({"a": None}).build() == ("a=?", [None])
