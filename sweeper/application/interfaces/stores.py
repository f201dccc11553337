"""Store interfaces (ports) for the sweep engine.

Protocols define the narrow capabilities the engine needs from each origin.
Concrete adapters live under sweeper.infrastructure and are selected once at
job startup.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class IBatchSource(Protocol):
    """Paginated origin ordered by a retention key (e.g. a relational table)."""

    async def fetch_batch(self, limit: int) -> list[str]:
        """Return up to limit eligible identifiers, oldest first.

        An empty list means no eligible records remain (exhaustion).
        Deletions from earlier batches must be visible to the next call.
        """


class IDeletionTarget(Protocol):
    """One store that holds copies of the swept records."""

    name: str

    async def delete(self, ids: Sequence[str]) -> int:
        """Delete ids; return how many the store reported removed.

        Absent ids are not an error (idempotent).
        """


class IKeyspace(Protocol):
    """Key-value keyspace enumerable by prefix (e.g. Redis SCAN)."""

    async def scan_prefix(
        self, prefix: str, page_size: int, cursor: int = 0
    ) -> tuple[list[str], int]:
        """Return one page of keys matching prefix* and the next cursor (0 = done)."""

    async def delete_keys(self, keys: Sequence[str]) -> int:
        """Delete keys in one multi-key call; return number removed."""

    async def size(self) -> int:
        """Return the number of keys in the whole keyspace."""


class IJobQueue(Protocol):
    """Job queue that can count jobs by status and clean completed jobs."""

    async def count_by_status(self, status: str) -> int:
        """Return the number of jobs currently in status."""

    async def clean(self, max_age_ms: int, max_count: int) -> list[str]:
        """Remove up to max_count completed jobs older than max_age_ms; return their ids."""
