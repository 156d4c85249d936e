"""Memory backend - in-memory backend for dry runs and tests without database."""

import asyncio
import re
from collections.abc import Sequence
from typing import Any

from bulkseed.exceptions import BulkSeedError

_CREATE_TABLE = re.compile(r"CREATE\s+TABLE\s+IF\s+NOT\s+EXISTS\s+(\w+)", re.IGNORECASE)
_INSERT = re.compile(r"INSERT\s+INTO\s+(\w+)\s*\(([^)]*)\)", re.IGNORECASE)
_COUNT = re.compile(r"SELECT\s+count\(\*\)\s+FROM\s+(\w+)", re.IGNORECASE)
_PING = re.compile(r"SELECT\s+1\s*\+\s*1", re.IGNORECASE)


class UndefinedTableError(BulkSeedError):
    """Statement referenced a table that was never created."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f'relation "{table}" does not exist')


class MemoryBackend:
    """
    In-memory backend for running seed plans without a database.

    Simulates database behavior:
    - Remembers tables created by CREATE TABLE IF NOT EXISTS
    - Rejects INSERTs into tables that were never created
    - Stores inserted rows as tuples, per table
    - Answers the ping and count(*) queries BatchSeeder issues

    Use case: dry runs, fast unit tests, offline development.
    """

    def __init__(self, delay: float = 0.0):
        """
        Initialize memory backend with empty state.

        Args:
            delay: Seconds each insert sleeps, to make batch overlap observable
        """
        self.delay = delay
        self.statements: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0
        self._rows: dict[str, list[tuple]] = {}

    async def execute(self, statement: str) -> None:
        self.statements.append(statement)
        match = _CREATE_TABLE.search(statement)
        if match:
            self._rows.setdefault(match.group(1), [])

    async def insert_many(self, statement: str, params: Sequence[Any]) -> int:
        self.statements.append(statement)
        match = _INSERT.search(statement)
        if match is None:
            raise ValueError(f"Not an INSERT statement: {statement[:80]}")

        table = match.group(1)
        width = len(match.group(2).split(","))
        if table not in self._rows:
            raise UndefinedTableError(table)

        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            rows = [tuple(params[i : i + width]) for i in range(0, len(params), width)]
            self._rows[table].extend(rows)
        finally:
            self.in_flight -= 1
        return len(rows)

    async def fetch_scalar(self, statement: str) -> Any:
        self.statements.append(statement)
        if _PING.search(statement):
            return 2
        match = _COUNT.search(statement)
        if match:
            table = match.group(1)
            if table not in self._rows:
                raise UndefinedTableError(table)
            return len(self._rows[table])
        raise ValueError(f"MemoryBackend cannot answer: {statement[:80]}")

    def get_rows(self, table: str) -> list[tuple]:
        """
        Get in-memory rows for inspection.

        Args:
            table: Table name

        Returns:
            List of row tuples for the table
        """
        return self._rows.get(table, [])

    def has_table(self, table: str) -> bool:
        return table in self._rows

    @property
    def insert_count(self) -> int:
        """Number of INSERT statements received."""
        return sum(1 for s in self.statements if _INSERT.search(s))

    def clear(self) -> None:
        """
        Clear all tables, rows, recorded statements and in-flight counters.

        Only call while no seed run is using the backend.
        """
        self._rows.clear()
        self.statements.clear()
        self.in_flight = 0
        self.peak_in_flight = 0
