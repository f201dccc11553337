"""Report subscription queue job counts, then clean completed jobs a fixed number of times.

Usage:
    sweeper-clean-queue [config-locator]
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from sweeper.application.dtos.sweep import QueueCleanResult
from sweeper.application.services.retention_policy import RetentionPolicy
from sweeper.application.use_cases.sweep_loop import QueueCleanLoop
from sweeper.core.config import Settings
from sweeper.infrastructure.messaging.job_queue import BullJobQueue
from sweeper.jobs import run_job
from sweeper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


async def run(settings: Settings) -> QueueCleanResult:
    """Count jobs by status and clean completed jobs; the queue is closed on every exit path."""
    cfg = settings.queue_clean
    redis_settings = settings.require_redis()
    policy = RetentionPolicy.starting_now(timedelta(milliseconds=cfg.grace_ms))
    logger.info(
        "Cleaning queue %s: grace=%sms max_count=%s iterations=%s",
        cfg.queue_name,
        cfg.grace_ms,
        cfg.max_count,
        cfg.iterations,
    )
    queue = BullJobQueue(cfg.queue_name, redis_settings)
    try:
        loop = QueueCleanLoop(
            queue, policy, max_count=cfg.max_count, iterations=cfg.iterations
        )
        return await loop.run()
    finally:
        await queue.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Console entry point."""
    return run_job("Clean completed jobs from the subscription queue", run, argv)


if __name__ == "__main__":
    raise SystemExit(main())
