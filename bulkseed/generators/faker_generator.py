"""Faker-based data generators."""

from collections.abc import Callable
from typing import Any

from faker import Faker
from faker.exceptions import UniquenessException

from bulkseed.exceptions import UniquenessExhaustedError
from bulkseed.generators.base import BaseGenerator
from bulkseed.targets import ColumnSpec, TableLayout

fake = Faker()


def seed_generators(seed: int) -> None:
    """Seed Faker's shared random source so generated rows are reproducible."""
    Faker.seed(seed)


class FakerGenerator(BaseGenerator):
    """
    Generate realistic rows using the Faker library.

    Values are independent between calls. Nothing stops two rows from
    getting the same email, so seeding a UNIQUE column can fail on
    collision. Use UniqueFakerGenerator when that matters.
    """

    # Column name → Faker method mapping
    COLUMN_MAPPINGS: dict[str, Callable[[Faker], Any]] = {
        "name": lambda f: f.name(),
        "full_name": lambda f: f.name(),
        "display_name": lambda f: f.name(),
        "first_name": lambda f: f.first_name(),
        "last_name": lambda f: f.last_name(),
        "username": lambda f: f.user_name(),
        "email": lambda f: f.email(),
        "phone": lambda f: f.phone_number(),
        "company": lambda f: f.company(),
        "city": lambda f: f.city(),
        "country": lambda f: f.country(),
        "url": lambda f: f.url(),
    }

    # Type-based fallbacks
    TYPE_FALLBACKS: dict[str, Callable[[Faker], Any]] = {
        "text": lambda f: f.text(max_nb_chars=50),
        "character varying": lambda f: f.pystr(max_chars=40),
        "integer": lambda f: f.random_int(min=1, max=1000),
        "bigint": lambda f: f.random_int(min=1, max=100000),
        "boolean": lambda f: f.boolean(),
        "timestamp with time zone": lambda f: f.date_time_this_year(),
        "date": lambda f: f.date_this_year(),
    }

    def __init__(self, faker: Faker | None = None):
        self.faker = faker or fake

    def generate(self, layout: TableLayout) -> tuple[Any, ...]:
        return tuple(self.generate_value(col, self.faker) for col in layout.columns)

    def generate_value(self, column: ColumnSpec, source: Any) -> Any:
        """Generate data for a column based on name, then type."""
        if column.name in self.COLUMN_MAPPINGS:
            return self.COLUMN_MAPPINGS[column.name](source)

        if column.pg_type in self.TYPE_FALLBACKS:
            return self.TYPE_FALLBACKS[column.pg_type](source)

        # Default: text
        return source.text(max_nb_chars=50)


class UniqueFakerGenerator(FakerGenerator):
    """
    Faker generator that never repeats a value in a UNIQUE column.

    Values already handed out are remembered by Faker's ``unique`` proxy
    until reset() is called, so memory grows with the number of rows.
    """

    def __init__(self, faker: Faker | None = None):
        # Own instance: the unique proxy's memory must not leak into other generators.
        super().__init__(faker or Faker())

    def generate(self, layout: TableLayout) -> tuple[Any, ...]:
        row = []
        for col in layout.columns:
            if not col.unique:
                row.append(self.generate_value(col, self.faker))
                continue
            try:
                row.append(self.generate_value(col, self.faker.unique))
            except UniquenessException:
                raise UniquenessExhaustedError(col.name, layout.table) from None
        return tuple(row)

    def reset(self) -> None:
        """Forget every value handed out so far."""
        self.faker.unique.clear()
