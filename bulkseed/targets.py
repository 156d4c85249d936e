"""Target tables that can be seeded."""

from dataclasses import dataclass, field
from enum import Enum

from bulkseed.exceptions import InvalidArgumentError


class TargetSchema(str, Enum):
    """Tables bulkseed knows how to create and fill."""

    USERS = "users"
    ACCOUNTS = "accounts"

    @classmethod
    def parse(cls, text: str) -> "TargetSchema":
        """
        Convert a user-supplied name to a target.

        Raises:
            InvalidArgumentError: If the name is not a known target
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise InvalidArgumentError("target", text, f"must be one of: {choices}") from None


@dataclass(frozen=True)
class ColumnSpec:
    """
    An insertable column.

    Attributes:
        name: Column name
        pg_type: PostgreSQL data type, used for generator fallbacks
        unique: Whether the column carries a UNIQUE constraint
    """

    name: str
    pg_type: str
    unique: bool = False


@dataclass(frozen=True)
class TableLayout:
    """
    Everything needed to create and fill one target table.

    Attributes:
        table: Table name
        columns: Insertable columns in INSERT order (identity columns excluded)
        ddl: Idempotent statements that create the table and its indexes
    """

    table: str
    columns: tuple[ColumnSpec, ...]
    ddl: tuple[str, ...] = field(default_factory=tuple)

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(col.name for col in self.columns)

    @property
    def unique_columns(self) -> tuple[str, ...]:
        return tuple(col.name for col in self.columns if col.unique)


_LAYOUTS: dict[TargetSchema, TableLayout] = {
    TargetSchema.USERS: TableLayout(
        table="users",
        columns=(
            ColumnSpec("name", "character varying"),
            ColumnSpec("email", "character varying", unique=True),
        ),
        ddl=(
            """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
                name VARCHAR(80) NOT NULL,
                email VARCHAR(80) NOT NULL UNIQUE
            )
            """,
        ),
    ),
    TargetSchema.ACCOUNTS: TableLayout(
        table="accounts",
        columns=(
            ColumnSpec("display_name", "character varying"),
            ColumnSpec("email", "character varying"),
        ),
        ddl=(
            """
            CREATE TABLE IF NOT EXISTS accounts (
                id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
                display_name VARCHAR(80) NOT NULL,
                email VARCHAR(255) NOT NULL,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """,
            "CREATE INDEX IF NOT EXISTS accounts_email_idx ON accounts (email)",
        ),
    ),
}


def layout_for(target: TargetSchema) -> TableLayout:
    """Return the table layout for a target."""
    return _LAYOUTS[TargetSchema(target)]
