"""Pytest configuration and shared fixtures."""

from collections.abc import Sequence
from typing import Any

import pytest
from psycopg import errors

from bulkseed.backends import MemoryBackend
from bulkseed.generators import BaseGenerator, seed_generators
from bulkseed.targets import TableLayout


class FailingBackend(MemoryBackend):
    """
    Memory backend whose n-th INSERT (0-based) raises a driver error.

    Batches are dispatched in plan order, so call n is batch n.
    """

    def __init__(self, fail_calls: set[int], delay: float = 0.0):
        super().__init__(delay=delay)
        self.fail_calls = fail_calls
        self.calls = 0

    async def insert_many(self, statement: str, params: Sequence[Any]) -> int:
        call = self.calls
        self.calls += 1
        if call in self.fail_calls:
            self.statements.append(statement)
            raise errors.UniqueViolation(
                'duplicate key value violates unique constraint "users_email_key"'
            )
        return await super().insert_many(statement, params)


class SequentialGenerator(BaseGenerator):
    """Deterministic rows: ("user 0", "user0@example.test"), ..."""

    def __init__(self):
        self.counter = 0

    def generate(self, layout: TableLayout) -> tuple[Any, ...]:
        n = self.counter
        self.counter += 1
        return (f"user {n}", f"user{n}@example.test")


@pytest.fixture(autouse=True)
def reproducible_faker() -> None:
    """Make Faker output stable across test runs."""
    seed_generators(1234)


@pytest.fixture
def backend() -> MemoryBackend:
    """Provide an empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def slow_backend() -> MemoryBackend:
    """In-memory backend whose INSERTs yield to the event loop, so batches overlap."""
    return MemoryBackend(delay=0.01)


@pytest.fixture
def failing_backend() -> type[FailingBackend]:
    """Factory for backends that fail chosen INSERT calls: failing_backend({1})."""
    return FailingBackend


@pytest.fixture
def sequential_generator() -> SequentialGenerator:
    """Provide a generator with predictable, collision-free rows."""
    return SequentialGenerator()
