"""BullMQ job queue adapter (count jobs by status, clean completed jobs).

The queue name and Redis connection must match the producer that enqueues
the jobs, otherwise clean operates on an empty queue.
"""

from __future__ import annotations

from typing import Any

import redis.asyncio as redis
from bullmq import Queue

from sweeper.core.config import RedisSettings
from sweeper.core.constants import STORE_QUEUE
from sweeper.domain.enums import JobStatus
from sweeper.domain.exceptions import StoreOperationException
from sweeper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class BullJobQueue:
    """Async wrapper over a bullmq.Queue.

    Pass queue for DI/testing; otherwise one is created from settings.
    Call close() when done (the job does this in a finally block).
    """

    def __init__(
        self,
        queue_name: str,
        settings: RedisSettings | None = None,
        *,
        queue: Any | None = None,
    ) -> None:
        if queue is None:
            if settings is None:
                raise ValueError("settings are required when no queue is injected")
            queue = Queue(queue_name, {"connection": settings.connection_options()})
        self.queue_name = queue_name
        self.queue = queue

    async def count_by_status(self, status: str) -> int:
        """Number of jobs in status (one of JobStatus)."""
        status = JobStatus(status).value
        try:
            return int(await self.queue.getJobCountByTypes(status))
        except redis.RedisError as e:
            raise StoreOperationException(STORE_QUEUE, f"count {status}", str(e)) from e

    async def clean(self, max_age_ms: int, max_count: int) -> list[str]:
        """Remove up to max_count completed jobs older than max_age_ms; return removed ids."""
        try:
            removed = await self.queue.clean(max_age_ms, max_count, JobStatus.COMPLETED.value)
        except redis.RedisError as e:
            raise StoreOperationException(STORE_QUEUE, "clean", str(e)) from e
        return [str(job_id) for job_id in removed or []]

    async def close(self) -> None:
        """Close the queue's Redis connection."""
        await self.queue.close()
        logger.debug("Queue %s closed", self.queue_name)
