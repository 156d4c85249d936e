"""Multi-row INSERT statement building."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from bulkseed.exceptions import InvalidArgumentError, RowShapeError
from bulkseed.targets import TableLayout

# PostgreSQL's extended protocol counts bind parameters in an Int16.
MAX_BIND_PARAMETERS = 65535


@dataclass(frozen=True)
class InsertStatement:
    """
    Multi-row INSERT for one table.

    Attributes:
        table: Table name
        columns: Column names, in the order row tuples supply values
    """

    table: str
    columns: tuple[str, ...]

    @classmethod
    def for_layout(cls, layout: TableLayout) -> "InsertStatement":
        return cls(table=layout.table, columns=layout.column_names)

    def max_rows(self) -> int:
        """Largest batch that fits in one statement's bind parameters."""
        return MAX_BIND_PARAMETERS // len(self.columns)

    def check_batch_size(self, max_batch_size: int) -> None:
        """
        Raises:
            InvalidArgumentError: If a full batch would exceed the bind parameter limit
        """
        if max_batch_size > self.max_rows():
            raise InvalidArgumentError(
                "max_batch_size",
                max_batch_size,
                f"must be <= {self.max_rows()} for {len(self.columns)} columns "
                f"into '{self.table}'",
            )

    def render(self, rows: Sequence[tuple]) -> tuple[str, list[Any]]:
        """
        Render the INSERT for a batch of rows.

        Args:
            rows: Row tuples, values in column order

        Returns:
            SQL text with %s placeholders and the flattened parameter list
            [row1_col1, row1_col2, row2_col1, ...]

        Raises:
            RowShapeError: If any row's length differs from the column count
            InvalidArgumentError: If rows is empty
        """
        if not rows:
            raise InvalidArgumentError("rows", rows, "a batch needs at least one row")

        width = len(self.columns)
        values: list[Any] = []
        for row in rows:
            if len(row) != width:
                raise RowShapeError(self.table, self.columns, tuple(row))
            values.extend(row)

        columns_list = ", ".join(self.columns)
        single_placeholder = f"({', '.join(['%s'] * width)})"
        placeholders = ", ".join([single_placeholder] * len(rows))

        sql = f"INSERT INTO {self.table} ({columns_list}) VALUES {placeholders}"
        return sql, values
