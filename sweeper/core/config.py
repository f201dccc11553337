"""Sweeper configuration (settings and environment).

Settings are resolved once per process by
sweeper.infrastructure.config_sources.load_settings and passed explicitly
into each job. There is no module-level cache and no reload. The value is
frozen.

Environment variables use the SWEEPER_ prefix and "__" for nested fields,
e.g. SWEEPER_REDIS__HOST or SWEEPER_AUDIT_PURGE__BATCH_SIZE. Values from a
config file or parameter store take precedence over the environment.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from sweeper.core.constants import (
    DEFAULT_AUDIT_BATCH_DELAY_SECONDS,
    DEFAULT_AUDIT_BATCH_SIZE,
    DEFAULT_AUDIT_HISTORY_TABLE,
    DEFAULT_AUDIT_ITERATIONS,
    DEFAULT_AUDIT_RETENTION_DAYS,
    DEFAULT_AUDIT_TABLE,
    DEFAULT_QUEUE_CLEAN_ITERATIONS,
    DEFAULT_QUEUE_CLEAN_MAX_COUNT,
    DEFAULT_QUEUE_GRACE_MS,
    DEFAULT_QUEUE_NAME,
    DEFAULT_SCAN_PAGE_SIZE,
)
from sweeper.domain.exceptions import ConfigurationException


class DatabaseSettings(BaseModel):
    """Postgres connection parameters (same shape as an RDS secret).

    Set url to override the discrete fields (any SQLAlchemy async URL).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = "localhost"
    port: int = 5432
    dbname: str = "medplum"
    username: str = "medplum"
    password: SecretStr | None = None
    url: str | None = None
    command_timeout: int = 60

    def sqlalchemy_url(self) -> URL | str:
        """Return the async driver URL (postgresql+asyncpg unless url is set)."""
        if self.url:
            return self.url
        return URL.create(
            "postgresql+asyncpg",
            username=self.username,
            password=self.password.get_secret_value() if self.password else None,
            host=self.host,
            port=self.port,
            database=self.dbname,
        )


class RedisSettings(BaseModel):
    """Redis connection parameters shared by the cache and the job queue."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: SecretStr | None = None
    tls: bool = False

    @field_validator("tls", mode="before")
    @classmethod
    def _tls_options_enable_tls(cls, value: Any) -> Any:
        """An ioredis-style tls options object (even empty) means TLS is on."""
        if isinstance(value, dict):
            return True
        return value

    def connection_options(self) -> dict[str, object]:
        """Keyword options for redis-py clients (used by the BullMQ queue)."""
        options: dict[str, object] = {
            "host": self.host,
            "port": self.port,
            "db": self.db,
        }
        if self.password:
            options["password"] = self.password.get_secret_value()
        if self.tls:
            options["ssl"] = True
        return options


class AuditPurgeSettings(BaseModel):
    """Audit event purge: relational table, history shadow table and cache mirror."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    table: str = DEFAULT_AUDIT_TABLE
    history_table: str | None = DEFAULT_AUDIT_HISTORY_TABLE
    id_column: str = "id"
    retention_column: str = "lastUpdated"
    cache_category: str | None = DEFAULT_AUDIT_TABLE
    retention_days: int = Field(default=DEFAULT_AUDIT_RETENTION_DAYS, ge=0)
    batch_size: int = Field(default=DEFAULT_AUDIT_BATCH_SIZE, ge=1)
    max_iterations: int = Field(default=DEFAULT_AUDIT_ITERATIONS, ge=1)
    batch_delay_seconds: float = Field(default=DEFAULT_AUDIT_BATCH_DELAY_SECONDS, ge=0)


class QueueCleanSettings(BaseModel):
    """Completed-job clean for the subscription queue."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    queue_name: str = DEFAULT_QUEUE_NAME
    grace_ms: int = Field(default=DEFAULT_QUEUE_GRACE_MS, ge=0)
    max_count: int = Field(default=DEFAULT_QUEUE_CLEAN_MAX_COUNT, ge=1)
    iterations: int = Field(default=DEFAULT_QUEUE_CLEAN_ITERATIONS, ge=1)


class InventorySettings(BaseModel):
    """Cache inventory scan. Empty categories means the default resource types."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page_size: int = Field(default=DEFAULT_SCAN_PAGE_SIZE, ge=1)
    categories: tuple[str, ...] = ()


class Settings(BaseSettings):
    """Resolved sweeper settings.

    database and redis are optional here; each job calls require_database /
    require_redis so a missing section fails before any sweep starts.
    Unknown keys are ignored so a full platform config file can be reused.
    """

    debug: bool = False

    database: DatabaseSettings | None = None
    redis: RedisSettings | None = None

    audit_purge: AuditPurgeSettings = AuditPurgeSettings()
    queue_clean: QueueCleanSettings = QueueCleanSettings()
    inventory: InventorySettings = InventorySettings()

    model_config = SettingsConfigDict(
        env_prefix="SWEEPER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    def require_database(self) -> DatabaseSettings:
        """Return database settings or raise ConfigurationException."""
        if self.database is None:
            raise ConfigurationException(
                "Database settings are required: set 'database' in the config "
                "or SWEEPER_DATABASE__HOST etc. in the environment.",
                field="database",
            )
        return self.database

    def require_redis(self) -> RedisSettings:
        """Return Redis settings or raise ConfigurationException."""
        if self.redis is None:
            raise ConfigurationException(
                "Redis settings are required: set 'redis' in the config "
                "or SWEEPER_REDIS__HOST etc. in the environment.",
                field="redis",
            )
        return self.redis
