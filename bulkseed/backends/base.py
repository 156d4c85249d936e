"""Interface every seeding backend provides."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Backend(Protocol):
    """
    Statement primitives BatchSeeder needs from a database.

    Implementations must tolerate several insert_many() calls being
    awaited at once, either by multiplexing connections or by queueing.
    """

    async def execute(self, statement: str) -> None:
        """Run a literal statement (DDL) with no parameters."""
        ...

    async def insert_many(self, statement: str, params: Sequence[Any]) -> int:
        """Run one parameterized multi-row INSERT; return the affected row count."""
        ...

    async def fetch_scalar(self, statement: str) -> Any:
        """Run a query and return the first column of its first row."""
        ...
