"""
Configuration management for bulkseed.

Loads and validates configuration from bulkseed.toml files and DB_* /
BULKSEED_* environment variables using Pydantic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from psycopg.conninfo import make_conninfo
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bulkseed.models import DEFAULT_BATCH_SIZE
from bulkseed.targets import TargetSchema

CONFIG_FILENAME = "bulkseed.toml"


class DatabaseConfig(BaseSettings):
    """Database connection configuration (DB_HOST, DB_USER, DB_PASSWORD, DB_NAME)."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = Field(default="127.0.0.1", description="Database server host")
    port: int = Field(default=5432, description="Database server port")
    user: str = Field(default="postgres", description="Database user")
    password: str = Field(default="", description="Database password")
    name: str = Field(default="test", description="Database name")
    min_pool_size: int = Field(default=1, ge=1, description="Connections kept open")
    max_pool_size: int = Field(default=10, ge=1, description="Upper bound on pooled connections")
    pool_timeout: float = Field(
        default=30.0, gt=0, description="Seconds to wait for a pooled connection"
    )

    def conninfo(self) -> str:
        """Render a libpq connection string."""
        return make_conninfo(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password or None,
            dbname=self.name,
        )


class SeedSettings(BaseSettings):
    """Seed run defaults (BULKSEED_COUNT, BULKSEED_BATCH_SIZE, ...)."""

    model_config = SettingsConfigDict(env_prefix="BULKSEED_")

    count: int = Field(default=1000, ge=0, description="Rows to insert")
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1, description="Rows per INSERT")
    target: TargetSchema = Field(default=TargetSchema.USERS, description="Table to seed")
    max_concurrency: Optional[int] = Field(
        default=None, ge=1, description="Cap on batches in flight (unset: no cap)"
    )

    @field_validator("target", mode="before")
    @classmethod
    def _parse_target(cls, value: object) -> object:
        if isinstance(value, str):
            return TargetSchema.parse(value)
        return value


class Config(BaseSettings):
    """Main configuration for bulkseed."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seed: SeedSettings = Field(default_factory=SeedSettings)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Values in the file take precedence over environment variables,
        which take precedence over defaults.

        Args:
            path: Path to bulkseed.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        # Build sections explicitly so unset keys still fall back to env vars.
        return cls(
            database=DatabaseConfig(**data.get("database", {})),
            seed=SeedSettings(**data.get("seed", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from bulkseed.toml.

        Searches for bulkseed.toml starting from start_dir and walking up
        parent directories. Falls back to environment and defaults when
        no file is found.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        # Walk up directory tree
        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            # Check if we've reached filesystem root
            parent = current.parent
            if parent == current:
                break
            current = parent

        return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        The password is never written; set DB_PASSWORD instead.

        Args:
            path: Path to write bulkseed.toml
        """
        config_path = Path(path)

        max_concurrency = (
            f"max_concurrency = {self.seed.max_concurrency}\n"
            if self.seed.max_concurrency is not None
            else "# max_concurrency = 8\n"
        )

        # Build TOML content manually for better formatting
        toml_content = f"""# bulkseed configuration
# Environment variables (DB_HOST, DB_USER, DB_PASSWORD, DB_NAME) fill unset keys.

[database]
host = "{self.database.host}"
port = {self.database.port}
user = "{self.database.user}"
name = "{self.database.name}"
min_pool_size = {self.database.min_pool_size}
max_pool_size = {self.database.max_pool_size}
pool_timeout = {self.database.pool_timeout}

[seed]
count = {self.seed.count}
batch_size = {self.seed.batch_size}
target = "{self.seed.target.value}"
{max_concurrency}"""

        config_path.write_text(toml_content)
