"""Bounded sweep loops.

SweepLoop drives fetch -> delete -> sleep until the source returns an empty
batch, the iteration cap is reached, or an error aborts the run.
QueueCleanLoop calls the queue's clean a fixed number of times, because the
queue never signals exhaustion; a run may leave eligible jobs behind when
more than iterations * max_count qualify, and operators simply re-run it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from sweeper.application.dtos.sweep import QueueCleanResult, SweepResult, SweepStats
from sweeper.domain.enums import JobStatus, StopReason, SweepState
from sweeper.domain.exceptions import PartialDeletionException, SweepInvariantException
from sweeper.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from sweeper.application.interfaces.stores import IBatchSource, IJobQueue
    from sweeper.application.services.cross_store_deleter import CrossStoreDeleter
    from sweeper.application.services.retention_policy import RetentionPolicy

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class SweepLoop:
    """Deletes eligible records batch by batch across coupled stores.

    One instance runs once; stats and state belong to that run only.
    Progress relies on deletes being visible to the next fetch. Identifiers
    that come back after being deleted abort the run instead of looping.
    """

    def __init__(
        self,
        source: "IBatchSource",
        deleter: "CrossStoreDeleter",
        *,
        batch_size: int,
        max_iterations: int,
        batch_delay_seconds: float = 0.0,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        if batch_delay_seconds < 0:
            raise ValueError(f"batch_delay_seconds must be >= 0, got {batch_delay_seconds}")
        self._source = source
        self._deleter = deleter
        self._batch_size = batch_size
        self._max_iterations = max_iterations
        self._batch_delay_seconds = batch_delay_seconds
        self._sleep = sleep
        self._deleted_ids: set[str] = set()
        self.state = SweepState.IDLE
        self.stats = SweepStats()

    async def run(self) -> SweepResult:
        """Run the sweep to a terminal state.

        Returns:
            SweepResult with state EXHAUSTED and the stop reason.

        Raises:
            SweeperException: Any store, partial-deletion or invariant error;
                state is FAILED and the error propagates unchanged.
        """
        if self.state is not SweepState.IDLE:
            raise RuntimeError("SweepLoop instances run once")
        try:
            stop_reason = await self._loop()
        except Exception:
            self.state = SweepState.FAILED
            logger.error(
                "Sweep failed after %s iteration(s), %s deleted",
                self.stats.iterations,
                self.stats.deleted,
            )
            raise
        self.state = SweepState.EXHAUSTED
        logger.info(
            "Sweep finished (%s): iterations=%s scanned=%s deleted=%s",
            stop_reason.value,
            self.stats.iterations,
            self.stats.scanned,
            self.stats.deleted,
        )
        return SweepResult(state=self.state, stop_reason=stop_reason, stats=self.stats)

    async def _loop(self) -> StopReason:
        for iteration in range(1, self._max_iterations + 1):
            self.state = SweepState.FETCHING
            ids = await self._source.fetch_batch(self._batch_size)
            self.stats.iterations += 1
            self.stats.scanned += len(ids)
            if not ids:
                logger.info("Iteration %s: no eligible records remain", iteration)
                return StopReason.EMPTY_BATCH

            repeated = [i for i in ids if i in self._deleted_ids]
            if repeated:
                raise SweepInvariantException(repeated)

            self.state = SweepState.DELETING
            try:
                await self._deleter.delete_all(ids)
            except PartialDeletionException:
                # primary rows are already gone
                self._record_deleted(ids)
                raise
            self._record_deleted(ids)
            logger.info(
                "Iteration %s: deleted %s record(s) (total %s)",
                iteration,
                len(set(ids)),
                self.stats.deleted,
            )

            if iteration < self._max_iterations and self._batch_delay_seconds > 0:
                self.state = SweepState.SLEEPING
                await self._sleep(self._batch_delay_seconds)
        logger.info("Iteration cap %s reached", self._max_iterations)
        return StopReason.ITERATION_CAP

    def _record_deleted(self, ids: list[str]) -> None:
        self._deleted_ids.update(ids)
        self.stats.deleted += len(set(ids))


class QueueCleanLoop:
    """Reports job counts by status, then cleans completed jobs a fixed number of times.

    There is no early stop on an empty clean and no delay between calls.
    """

    def __init__(
        self,
        queue: "IJobQueue",
        policy: "RetentionPolicy",
        *,
        max_count: int,
        iterations: int,
    ) -> None:
        if max_count < 1:
            raise ValueError(f"max_count must be >= 1, got {max_count}")
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        self._queue = queue
        self._policy = policy
        self._max_count = max_count
        self._iterations = iterations

    async def count_jobs(self) -> dict[str, int]:
        """Return job counts for every JobStatus, in enumeration order."""
        counts: dict[str, int] = {}
        for status in JobStatus.values():
            counts[status] = await self._queue.count_by_status(status)
            logger.info("Queue jobs %s: %s", status, counts[status])
        return counts

    async def run(self) -> QueueCleanResult:
        """Count jobs, then call clean exactly `iterations` times."""
        counts = await self.count_jobs()
        stats = SweepStats()
        removed_per_iteration: list[int] = []
        grace_ms = self._policy.max_age_ms
        for iteration in range(1, self._iterations + 1):
            removed = await self._queue.clean(grace_ms, self._max_count)
            stats.iterations += 1
            stats.scanned += len(removed)
            stats.deleted += len(removed)
            removed_per_iteration.append(len(removed))
            logger.info("Clean %s: deleted %s job(s)", iteration, len(removed))
        logger.info(
            "Queue clean finished: calls=%s deleted=%s", stats.iterations, stats.deleted
        )
        return QueueCleanResult(
            counts_by_status=counts,
            removed_per_iteration=removed_per_iteration,
            stats=stats,
        )
