"""Purge audit events past retention from Postgres (table + history) and the Redis cache.

Usage:
    sweeper-purge-audit [config-locator]
    python -m scripts.purge_audit_events file:sweeper.config.json
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from sweeper.application.dtos.sweep import SweepResult
from sweeper.application.services.cross_store_deleter import CrossStoreDeleter
from sweeper.application.services.retention_policy import RetentionPolicy
from sweeper.application.use_cases.sweep_loop import SweepLoop
from sweeper.core.config import Settings
from sweeper.infrastructure.cache.redis_keyspace import (
    CacheDeletionTarget,
    RedisKeyspace,
    create_redis_client,
)
from sweeper.infrastructure.persistence.database import create_engine_from_settings
from sweeper.infrastructure.persistence.relational_source import (
    RelationalBatchSource,
    audit_deletion_targets,
)
from sweeper.jobs import run_job
from sweeper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


async def run(settings: Settings) -> SweepResult:
    """Delete aged audit events batch by batch; connections are released on every exit path."""
    cfg = settings.audit_purge
    database_settings = settings.require_database()
    redis_settings = settings.require_redis() if cfg.cache_category else None

    policy = RetentionPolicy.starting_now(timedelta(days=cfg.retention_days))
    logger.info(
        "Purging %s rows older than %s (batch_size=%s, max_iterations=%s, delay=%ss)",
        cfg.table,
        policy.cutoff.isoformat(),
        cfg.batch_size,
        cfg.max_iterations,
        cfg.batch_delay_seconds,
    )

    engine = create_engine_from_settings(database_settings, echo=settings.debug)
    redis_client = create_redis_client(redis_settings) if redis_settings else None
    try:
        source = RelationalBatchSource(
            engine,
            policy,
            table_name=cfg.table,
            id_column=cfg.id_column,
            retention_column=cfg.retention_column,
        )
        targets = audit_deletion_targets(
            engine,
            table_name=cfg.table,
            history_table_name=cfg.history_table,
            id_column=cfg.id_column,
        )
        if redis_client is not None and cfg.cache_category:
            targets.append(CacheDeletionTarget(RedisKeyspace(redis_client), cfg.cache_category))
        loop = SweepLoop(
            source,
            CrossStoreDeleter(targets),
            batch_size=cfg.batch_size,
            max_iterations=cfg.max_iterations,
            batch_delay_seconds=cfg.batch_delay_seconds,
        )
        return await loop.run()
    finally:
        await engine.dispose()
        if redis_client is not None:
            await redis_client.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    """Console entry point."""
    return run_job("Purge aged audit events from Postgres and Redis", run, argv)


if __name__ == "__main__":
    raise SystemExit(main())
