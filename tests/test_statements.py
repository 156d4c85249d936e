"""Tests for multi-row INSERT rendering."""

import pytest

from bulkseed import InvalidArgumentError, RowShapeError, TargetSchema, layout_for
from bulkseed.statements import MAX_BIND_PARAMETERS, InsertStatement


@pytest.fixture
def users_insert() -> InsertStatement:
    return InsertStatement.for_layout(layout_for(TargetSchema.USERS))


def test_render_multi_row_insert(users_insert):
    """One placeholder group per row, parameters flattened row by row."""
    sql, params = users_insert.render([("Ann", "ann@example.test"), ("Bob", "bob@example.test")])

    assert sql == "INSERT INTO users (name, email) VALUES (%s, %s), (%s, %s)"
    assert params == ["Ann", "ann@example.test", "Bob", "bob@example.test"]


def test_render_single_row(users_insert):
    sql, params = users_insert.render([("Ann", "ann@example.test")])

    assert sql.endswith("VALUES (%s, %s)")
    assert len(params) == 2


def test_placeholder_count_matches_params(users_insert):
    """Placeholders and parameters always line up."""
    rows = [(f"n{i}", f"e{i}") for i in range(37)]
    sql, params = users_insert.render(rows)

    assert sql.count("%s") == len(params) == 74


@pytest.mark.parametrize("row", [("only-name",), ("a", "b", "c"), ()])
def test_wrong_arity_is_rejected(users_insert, row):
    """Rows that don't match the column list fail before any SQL is produced."""
    with pytest.raises(RowShapeError) as exc_info:
        users_insert.render([("Ann", "ann@example.test"), row])

    assert exc_info.value.table == "users"
    assert exc_info.value.columns == ("name", "email")
    assert "2 columns" in str(exc_info.value)


def test_row_shape_error_is_invalid_argument(users_insert):
    with pytest.raises(InvalidArgumentError):
        users_insert.render([("x",)])


def test_empty_batch_is_rejected(users_insert):
    with pytest.raises(InvalidArgumentError):
        users_insert.render([])


def test_bind_parameter_ceiling(users_insert):
    """A full batch must fit in PostgreSQL's bind parameter limit."""
    assert users_insert.max_rows() == MAX_BIND_PARAMETERS // 2

    users_insert.check_batch_size(users_insert.max_rows())
    with pytest.raises(InvalidArgumentError, match="max_batch_size"):
        users_insert.check_batch_size(users_insert.max_rows() + 1)
