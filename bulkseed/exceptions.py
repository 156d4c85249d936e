"""Custom exceptions with helpful error messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulkseed.models import SeedResult


class BulkSeedError(Exception):
    """Base exception for bulkseed errors."""

    pass


class InvalidArgumentError(BulkSeedError, ValueError):
    """Seed parameters are malformed. Raised before any statement is issued."""

    def __init__(self, name: str, value: object, requirement: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}: {value!r} ({requirement}).")


class RowShapeError(InvalidArgumentError):
    """Generated row does not line up with the INSERT column list."""

    def __init__(self, table: str, columns: tuple[str, ...], row: tuple):
        self.name = "row"
        self.value = row
        self.table = table
        self.columns = columns
        self.row = row
        # Skip InvalidArgumentError's message, which is about counts.
        BulkSeedError.__init__(
            self,
            f"Row for table '{table}' has {len(row)} values but the INSERT "
            f"lists {len(columns)} columns ({', '.join(columns)}).\n\n"
            f"Suggestions:\n"
            f"1. Make the generator return one value per column, in column order\n"
            f"2. Check the generator was written for this target table",
        )


class UniquenessExhaustedError(BulkSeedError):
    """Could not produce a fresh value for a unique column."""

    def __init__(self, column: str, table: str):
        self.column = column
        self.table = table
        super().__init__(
            f"Ran out of unique values for column '{column}' in table '{table}'.\n\n"
            f"Suggestions:\n"
            f"1. Seed fewer rows per run\n"
            f"2. Call UniqueFakerGenerator.reset() between unrelated runs\n"
            f"3. Use a generator with a larger value space for '{column}'"
        )


class SchemaError(BulkSeedError):
    """DDL statement failed while creating the seed tables."""

    def __init__(self, table: str, statement: str, cause: BaseException):
        self.table = table
        self.statement = statement
        super().__init__(
            f"Could not create table '{table}': {cause}\n\n"
            f"Statement:\n{statement.strip()}\n\n"
            f"Suggestions:\n"
            f"1. Check the database user may CREATE in the current schema\n"
            f"2. Check the connection settings (DB_HOST, DB_USER, DB_NAME)"
        )


class BatchInsertError(BulkSeedError):
    """One batch's multi-row INSERT failed."""

    def __init__(self, index: int, size: int, table: str, cause: BaseException):
        self.index = index
        self.size = size
        self.table = table
        self.cause = cause
        super().__init__(
            f"Batch {index} ({size} rows) into '{table}' failed: "
            f"{type(cause).__name__}: {cause}"
        )


class BatchGenerationError(BatchInsertError):
    """A batch's rows could not be generated, so its INSERT was never sent."""

    def __init__(self, index: int, size: int, table: str, cause: BaseException):
        self.index = index
        self.size = size
        self.table = table
        self.cause = cause
        BulkSeedError.__init__(
            self,
            f"Batch {index} ({size} rows) for '{table}' was not sent, row "
            f"generation failed: {type(cause).__name__}: {cause}",
        )


class AggregateSeedError(BulkSeedError):
    """
    One or more batches failed during a seed run.

    Batches that completed are not rolled back. ``result`` holds the
    outcome of every batch, so callers can tell a partial run from a
    total failure.
    """

    def __init__(self, errors: list[BatchInsertError], result: SeedResult):
        self.errors = errors
        self.result = result
        lines = "\n".join(f"  - {error}" for error in errors)
        super().__init__(
            f"{len(errors)} of {len(result.batches)} batches failed; "
            f"{result.total_rows} of {result.requested_rows} rows inserted "
            f"into '{result.table}'.\n{lines}\n\n"
            f"Suggestions:\n"
            f"1. Rows from successful batches remain in the table; "
            f"truncate it before re-seeding if duplicates matter\n"
            f"2. Use UniqueFakerGenerator if unique columns collide\n"
            f"3. Lower --max-concurrency if the server rejects connections"
        )

    @property
    def first(self) -> BatchInsertError:
        """The failure with the lowest batch index."""
        return self.errors[0]

    @property
    def is_partial(self) -> bool:
        """True when at least one batch succeeded."""
        return self.result.batches_succeeded > 0
