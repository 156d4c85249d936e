"""
bulkseed - Bulk Synthetic Seed Data for PostgreSQL

Creates test tables and fills them with Faker-generated rows, split into
bounded multi-row INSERT batches that run concurrently.
"""

from bulkseed.backends import ConnectionBackend, MemoryBackend, PoolBackend
from bulkseed.exceptions import (
    AggregateSeedError,
    BatchGenerationError,
    BatchInsertError,
    BulkSeedError,
    InvalidArgumentError,
    RowShapeError,
    SchemaError,
    UniquenessExhaustedError,
)
from bulkseed.generators import BaseGenerator, FakerGenerator, UniqueFakerGenerator
from bulkseed.models import BatchOutcome, SeedRequest, SeedResult, SeedStatus
from bulkseed.planner import BatchPlan, plan_batches
from bulkseed.seeder import BatchSeeder
from bulkseed.targets import TargetSchema, layout_for

__version__ = "0.1.0"

__all__ = [
    "BatchSeeder",
    "TargetSchema",
    "layout_for",
    "plan_batches",
    "BatchPlan",
    "SeedRequest",
    "SeedResult",
    "SeedStatus",
    "BatchOutcome",
    "BaseGenerator",
    "FakerGenerator",
    "UniqueFakerGenerator",
    "PoolBackend",
    "ConnectionBackend",
    "MemoryBackend",
    "BulkSeedError",
    "InvalidArgumentError",
    "RowShapeError",
    "UniquenessExhaustedError",
    "SchemaError",
    "BatchInsertError",
    "BatchGenerationError",
    "AggregateSeedError",
]
