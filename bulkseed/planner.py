"""Split a row count into bounded batch sizes."""

from collections.abc import Iterator

from bulkseed.models import DEFAULT_BATCH_SIZE, require_count


class BatchPlan:
    """
    Lazy, restartable sequence of batch sizes.

    Every size lies in (0, max_batch_size] and the sizes sum to
    total_count. Only the last batch may be short. Iterating again
    starts over from the beginning.

    Example:
        >>> list(plan_batches(2500, 1000))
        [1000, 1000, 500]
    """

    def __init__(self, total_count: int, max_batch_size: int):
        self.total_count = require_count("total_count", total_count, 0)
        self.max_batch_size = require_count("max_batch_size", max_batch_size, 1)

    def __iter__(self) -> Iterator[int]:
        remaining = self.total_count
        while remaining > 0:
            size = min(remaining, self.max_batch_size)
            yield size
            remaining -= size

    def __len__(self) -> int:
        return -(-self.total_count // self.max_batch_size)

    def __repr__(self) -> str:
        return (
            f"BatchPlan(total_count={self.total_count}, "
            f"max_batch_size={self.max_batch_size})"
        )


def plan_batches(total_count: int, max_batch_size: int = DEFAULT_BATCH_SIZE) -> BatchPlan:
    """
    Plan batch sizes for a seed run.

    Args:
        total_count: Rows to insert (>= 0)
        max_batch_size: Largest allowed batch (>= 1)

    Returns:
        BatchPlan yielding the size of each batch

    Raises:
        InvalidArgumentError: If total_count < 0 or max_batch_size < 1
    """
    return BatchPlan(total_count, max_batch_size)
