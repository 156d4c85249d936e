"""Tests for target table layouts."""

import pytest

from bulkseed import InvalidArgumentError, TargetSchema, layout_for


def test_every_target_has_a_layout():
    """No target is left without DDL and columns."""
    for target in TargetSchema:
        layout = layout_for(target)
        assert layout.table == target.value
        assert layout.columns
        assert layout.ddl


def test_users_layout():
    """users takes (name, email) with email unique."""
    layout = layout_for(TargetSchema.USERS)

    assert layout.column_names == ("name", "email")
    assert layout.unique_columns == ("email",)


def test_accounts_layout():
    """accounts takes (display_name, email) and has no unique insert column."""
    layout = layout_for(TargetSchema.ACCOUNTS)

    assert layout.column_names == ("display_name", "email")
    assert layout.unique_columns == ()


def test_ddl_is_idempotent():
    """Every DDL statement is guarded with IF NOT EXISTS."""
    for target in TargetSchema:
        for statement in layout_for(target).ddl:
            assert "IF NOT EXISTS" in statement
            assert "DROP" not in statement.upper()


@pytest.mark.parametrize("text", ["users", "USERS", " Accounts "])
def test_parse_known_target(text):
    """Names are matched case-insensitively, ignoring surrounding space."""
    assert TargetSchema.parse(text) in set(TargetSchema)


def test_parse_unknown_target():
    """Unknown names fail listing the valid choices."""
    with pytest.raises(InvalidArgumentError, match="users, accounts"):
        TargetSchema.parse("orders")


def test_layout_for_accepts_value():
    """Plain enum values resolve the same as members."""
    assert layout_for("users") == layout_for(TargetSchema.USERS)
