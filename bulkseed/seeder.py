"""BatchSeeder - create target tables and fill them with concurrent batches."""

import asyncio
import logging

from bulkseed.backends.base import Backend
from bulkseed.exceptions import (
    AggregateSeedError,
    BatchGenerationError,
    BatchInsertError,
    SchemaError,
)
from bulkseed.generators import BaseGenerator, FakerGenerator
from bulkseed.models import (
    DEFAULT_BATCH_SIZE,
    BatchOutcome,
    SeedRequest,
    SeedResult,
    require_count,
)
from bulkseed.planner import plan_batches
from bulkseed.statements import InsertStatement
from bulkseed.targets import TargetSchema, layout_for

logger = logging.getLogger(__name__)


class BatchSeeder:
    """
    Seed one target table with synthetic rows.

    The seeder holds no state between calls: every seed() is an
    independent run, and a failed run must be re-issued from scratch.
    The backend is borrowed, never opened or closed here.

    Example:
        >>> async with AsyncConnectionPool(conninfo) as pool:
        ...     seeder = BatchSeeder(PoolBackend(pool), TargetSchema.USERS)
        ...     await seeder.migrate()
        ...     result = await seeder.seed(2500, max_batch_size=1000)
        >>> result.total_rows
        2500
    """

    def __init__(
        self,
        backend: Backend,
        target: TargetSchema = TargetSchema.USERS,
        generator: BaseGenerator | None = None,
        max_concurrency: int | None = None,
    ):
        """
        Initialize BatchSeeder.

        Args:
            backend: Statement executor (pool, single connection or memory)
            target: Table to create and fill
            generator: Row source (default: FakerGenerator)
            max_concurrency: Cap on batches in flight at once (default: no cap)

        Raises:
            InvalidArgumentError: If max_concurrency < 1
        """
        if max_concurrency is not None:
            require_count("max_concurrency", max_concurrency, 1)

        self.backend = backend
        self.target = TargetSchema(target)
        self.layout = layout_for(self.target)
        self.statement = InsertStatement.for_layout(self.layout)
        self.generator = generator or FakerGenerator()
        self.max_concurrency = max_concurrency

    async def migrate(self) -> None:
        """
        Create the target table if it does not exist.

        Safe to call repeatedly. Existing tables are never dropped or
        altered, even if their columns differ.

        Raises:
            SchemaError: If a DDL statement fails (not retried)
        """
        for statement in self.layout.ddl:
            try:
                await self.backend.execute(statement)
            except Exception as e:
                raise SchemaError(self.layout.table, statement, e) from e

        logger.info(f"Ensured table '{self.layout.table}' exists")

    async def seed(
        self,
        total_count: int,
        max_batch_size: int = DEFAULT_BATCH_SIZE,
        cancel: asyncio.Event | None = None,
    ) -> SeedResult:
        """
        Insert ``total_count`` generated rows in concurrent batches.

        All batches are dispatched together and awaited until every one
        has finished. A failing batch does not stop the others, and
        batches that succeeded are not rolled back.

        Args:
            total_count: Rows to insert (>= 0)
            max_batch_size: Rows per INSERT statement (>= 1)
            cancel: Once set, batches not yet dispatched are skipped;
                in-flight INSERTs still run to completion

        Returns:
            SeedResult; total_rows equals total_count unless cancelled

        Raises:
            InvalidArgumentError: Bad parameters, raised before any INSERT
            AggregateSeedError: One or more batches failed, either in their
                INSERT or in row generation (BatchGenerationError, e.g. a
                RowShapeError cause; that batch's INSERT is never sent)
        """
        request = SeedRequest(total_count, max_batch_size)
        self.statement.check_batch_size(request.max_batch_size)

        plan = plan_batches(request.total_count, request.max_batch_size)
        result = SeedResult(table=self.layout.table, requested_rows=request.total_count)

        if len(plan) == 0:
            logger.info(f"Nothing to seed into '{self.layout.table}'")
            return result

        logger.info(
            f"Seeding {request.total_count} rows into '{self.layout.table}' "
            f"in {len(plan)} batches of up to {request.max_batch_size}"
        )

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        outcomes = await asyncio.gather(
            *(
                self._run_batch(index, size, semaphore, cancel)
                for index, size in enumerate(plan)
            ),
            return_exceptions=True,
        )

        # Batch failures come back as outcomes; anything raised here is
        # cancellation or an interpreter exit and is never folded into the result.
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        result.batches = list(outcomes)

        if result.errors:
            logger.warning(result.summary())
            raise AggregateSeedError(result.errors, result)

        if result.batches_skipped:
            logger.warning(result.summary())
        else:
            logger.info(result.summary())
        return result

    async def _run_batch(
        self,
        index: int,
        size: int,
        semaphore: asyncio.Semaphore | None,
        cancel: asyncio.Event | None,
    ) -> BatchOutcome:
        if semaphore is None:
            return await self._insert_batch(index, size, cancel)
        async with semaphore:
            return await self._insert_batch(index, size, cancel)

    async def _insert_batch(
        self, index: int, size: int, cancel: asyncio.Event | None
    ) -> BatchOutcome:
        if cancel is not None and cancel.is_set():
            logger.debug(f"Batch {index} skipped: seed cancelled")
            return BatchOutcome(index=index, size=size, skipped=True)

        try:
            rows = self.generator.generate_batch(self.layout, size)
            sql, params = self.statement.render(rows)
        except Exception as e:
            error = BatchGenerationError(index, size, self.layout.table, e)
            error.__cause__ = e
            logger.error(str(error))
            return BatchOutcome(index=index, size=size, error=error)

        logger.debug(f"Dispatching batch {index} ({size} rows) into '{self.layout.table}'")
        try:
            await self.backend.insert_many(sql, params)
        except Exception as e:
            error = BatchInsertError(index, size, self.layout.table, e)
            error.__cause__ = e
            logger.error(str(error))
            return BatchOutcome(index=index, size=size, error=error)

        logger.debug(f"Batch {index} ({size} rows) done")
        return BatchOutcome(index=index, size=size)

    async def ping(self) -> bool:
        """Check the backend answers a trivial query."""
        return await self.backend.fetch_scalar("SELECT 1 + 1") == 2

    async def count(self) -> int:
        """Count rows currently in the target table."""
        return int(await self.backend.fetch_scalar(f"SELECT count(*) FROM {self.layout.table}"))
