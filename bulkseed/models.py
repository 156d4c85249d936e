"""Data models and type definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from bulkseed.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from bulkseed.exceptions import BatchInsertError

DEFAULT_BATCH_SIZE = 1000


def require_count(name: str, value: object, minimum: int) -> int:
    """
    Validate a whole-number parameter.

    Args:
        name: Parameter name used in the error message
        value: Value to check
        minimum: Smallest accepted value

    Returns:
        The value, unchanged

    Raises:
        InvalidArgumentError: If value is not an int (bools rejected) or below minimum
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(name, value, "must be an integer")
    if value < minimum:
        raise InvalidArgumentError(name, value, f"must be >= {minimum}")
    return value


@dataclass(frozen=True)
class SeedRequest:
    """
    Parameters of one seed run.

    Attributes:
        total_count: Number of rows to insert (>= 0)
        max_batch_size: Upper bound on rows per INSERT statement (>= 1)
    """

    total_count: int
    max_batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        require_count("total_count", self.total_count, 0)
        require_count("max_batch_size", self.max_batch_size, 1)


class SeedStatus(str, Enum):
    """Overall outcome of a seed run."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class BatchOutcome:
    """
    Fate of a single planned batch.

    Attributes:
        index: 0-based position in the batch plan
        size: Number of rows in the batch
        error: Failure, if the INSERT raised
        skipped: True if the batch was never dispatched (run cancelled)
    """

    index: int
    size: int
    error: BatchInsertError | None = None
    skipped: bool = False

    @property
    def succeeded(self) -> bool:
        return self.error is None and not self.skipped


@dataclass
class SeedResult:
    """
    Aggregate outcome of a seed run.

    ``total_rows`` counts rows whose INSERT completed without error. It
    does not assert the rows were durably committed by the server.

    Attributes:
        table: Target table name
        requested_rows: Rows asked for by the caller
        batches: One outcome per planned batch, in plan order
    """

    table: str
    requested_rows: int
    batches: list[BatchOutcome] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(b.size for b in self.batches if b.succeeded)

    @property
    def batches_succeeded(self) -> int:
        return sum(1 for b in self.batches if b.succeeded)

    @property
    def batches_failed(self) -> int:
        return sum(1 for b in self.batches if b.error is not None)

    @property
    def batches_skipped(self) -> int:
        return sum(1 for b in self.batches if b.skipped)

    @property
    def errors(self) -> list[BatchInsertError]:
        return [b.error for b in self.batches if b.error is not None]

    @property
    def first_error(self) -> BatchInsertError | None:
        errors = self.errors
        return errors[0] if errors else None

    @property
    def status(self) -> SeedStatus:
        if self.batches_failed == 0 and self.batches_skipped == 0:
            return SeedStatus.COMPLETE
        if self.batches_failed == 0:
            return SeedStatus.CANCELLED
        if self.batches_succeeded == 0:
            return SeedStatus.FAILED
        return SeedStatus.PARTIAL

    def summary(self) -> str:
        """One-line human readable summary."""
        text = (
            f"{self.status.value}: {self.total_rows}/{self.requested_rows} rows "
            f"into '{self.table}' ({self.batches_succeeded}/{len(self.batches)} batches"
        )
        if self.batches_failed:
            text += f", {self.batches_failed} failed"
        if self.batches_skipped:
            text += f", {self.batches_skipped} skipped"
        return text + ")"
