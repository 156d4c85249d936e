"""Base generator interface."""

from abc import ABC, abstractmethod
from typing import Any

from bulkseed.targets import TableLayout


class BaseGenerator(ABC):
    """
    Base class for row generators.

    Subclass this to plug a different data source into BatchSeeder.

    Example:
        >>> class SequentialGenerator(BaseGenerator):
        ...     def __init__(self):
        ...         self.counter = 0
        ...     def generate(self, layout):
        ...         self.counter += 1
        ...         return (f"user {self.counter}", f"user{self.counter}@example.test")
        >>>
        >>> seeder = BatchSeeder(backend, generator=SequentialGenerator())
    """

    @abstractmethod
    def generate(self, layout: TableLayout) -> tuple[Any, ...]:
        """
        Generate one row.

        Args:
            layout: Target table layout

        Returns:
            One value per column in layout.columns, in the same order
        """
        pass

    def generate_batch(self, layout: TableLayout, size: int) -> list[tuple[Any, ...]]:
        """Generate ``size`` rows for one batch."""
        return [self.generate(layout) for _ in range(size)]
