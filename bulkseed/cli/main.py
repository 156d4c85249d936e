"""CLI commands for bulkseed."""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, TypeVar

import click
import psycopg
from pydantic import ValidationError
from psycopg_pool import AsyncConnectionPool

from bulkseed.backends import Backend, MemoryBackend, PoolBackend
from bulkseed.config import CONFIG_FILENAME, Config, DatabaseConfig
from bulkseed.exceptions import BulkSeedError
from bulkseed.generators import FakerGenerator, UniqueFakerGenerator, seed_generators
from bulkseed.models import SeedRequest
from bulkseed.seeder import BatchSeeder
from bulkseed.targets import TargetSchema

logger = logging.getLogger(__name__)

T = TypeVar("T")

TARGET_CHOICES = click.Choice([t.value for t in TargetSchema], case_sensitive=False)


@asynccontextmanager
async def open_backend(database: DatabaseConfig, dry_run: bool = False) -> AsyncIterator[Backend]:
    """Open a pooled backend for the configured database, or a memory one for dry runs."""
    if dry_run:
        yield MemoryBackend()
        return

    logger.debug(f"Connecting to {database.host}:{database.port}/{database.name}")
    async with AsyncConnectionPool(
        database.conninfo(),
        min_size=database.min_pool_size,
        max_size=database.max_pool_size,
        timeout=database.pool_timeout,
        open=False,
    ) as pool:
        yield PoolBackend(pool)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a command coroutine, turning known failures into exit code 1."""
    try:
        return asyncio.run(coro)
    except BulkSeedError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    except psycopg.Error as e:
        click.echo(f"✗ Database error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="bulkseed")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Config file (default: nearest {CONFIG_FILENAME})",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every batch")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """bulkseed - fill PostgreSQL tables with synthetic test rows."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = Config.from_toml(config_path) if config_path else Config.find_and_load()
    except (ValidationError, ValueError) as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--target", type=TARGET_CHOICES, help="Table to create")
@click.pass_obj
def migrate(config: Config, target: str | None) -> None:
    """Create the target table if it does not exist."""
    schema = TargetSchema.parse(target) if target else config.seed.target

    async def _migrate() -> None:
        async with open_backend(config.database) as backend:
            await BatchSeeder(backend, schema).migrate()

    run(_migrate())
    click.echo(f"✓ Table '{schema.value}' is ready")


@cli.command()
@click.option("--count", "-n", type=int, help="Rows to insert")
@click.option("--batch-size", type=int, help="Rows per INSERT statement")
@click.option("--target", type=TARGET_CHOICES, help="Table to seed")
@click.option("--max-concurrency", type=int, help="Cap on batches in flight")
@click.option("--unique", is_flag=True, help="Never repeat values in UNIQUE columns")
@click.option("--seed", "random_seed", type=int, help="Seed Faker for reproducible rows")
@click.option("--no-migrate", is_flag=True, help="Skip CREATE TABLE IF NOT EXISTS")
@click.option("--dry-run", is_flag=True, help="Generate rows in memory, no database")
@click.pass_obj
def seed(
    config: Config,
    count: int | None,
    batch_size: int | None,
    target: str | None,
    max_concurrency: int | None,
    unique: bool,
    random_seed: int | None,
    no_migrate: bool,
    dry_run: bool,
) -> None:
    """Create the target table, then insert generated rows."""
    settings = config.seed
    count = settings.count if count is None else count
    batch_size = settings.batch_size if batch_size is None else batch_size
    schema = TargetSchema.parse(target) if target else settings.target
    max_concurrency = settings.max_concurrency if max_concurrency is None else max_concurrency

    if random_seed is not None:
        seed_generators(random_seed)
    generator = UniqueFakerGenerator() if unique else FakerGenerator()

    async def _seed() -> None:
        # Reject bad parameters before CREATE TABLE touches the database.
        SeedRequest(count, batch_size)
        async with open_backend(config.database, dry_run=dry_run) as backend:
            seeder = BatchSeeder(backend, schema, generator, max_concurrency)
            if not no_migrate:
                await seeder.migrate()
            result = await seeder.seed(count, batch_size)
            click.echo(f"✓ {result.summary()}")
            if dry_run:
                click.echo("(dry run: nothing was written to the database)")

    run(_seed())


@cli.command()
@click.option("--target", type=TARGET_CHOICES, help="Also count rows in this table")
@click.pass_obj
def ping(config: Config, target: str | None) -> None:
    """Check the database is reachable."""

    schema = TargetSchema.parse(target) if target else config.seed.target

    async def _ping() -> tuple[bool, int | None]:
        async with open_backend(config.database) as backend:
            seeder = BatchSeeder(backend, schema)
            if not await seeder.ping():
                return False, None
            return True, (await seeder.count() if target else None)

    ok, rows = run(_ping())
    if not ok:
        click.echo("✗ Database answered unexpectedly", err=True)
        sys.exit(1)

    click.echo(f"✓ Connected to {config.database.host}/{config.database.name}")
    if rows is not None:
        click.echo(f"  {schema.value}: {rows} rows")


@cli.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(CONFIG_FILENAME),
    show_default=True,
    help="Where to write the config file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_obj
def init(config: Config, path: Path, force: bool) -> None:
    """Write a bulkseed.toml with the current settings."""
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    config.to_toml(path)
    click.echo(f"✓ Wrote {path}")


if __name__ == "__main__":
    cli()
