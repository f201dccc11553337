"""Cache inventory: count cached keys per resource category (read-only).

Counts come from paging SCAN while other clients may write, so they are
approximate and suitable for reporting only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from sweeper.application.dtos.sweep import InventoryReport
from sweeper.core.constants import SCAN_CURSOR_DONE
from sweeper.infrastructure.cache.keys import category_prefix
from sweeper.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from sweeper.application.interfaces.stores import IKeyspace

logger = get_logger(__name__)


class InventoryScanner:
    """Folds keyspace scan pages into a category -> count mapping."""

    def __init__(self, keyspace: "IKeyspace", *, page_size: int) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._keyspace = keyspace
        self._page_size = page_size

    async def count_keys_by_prefix(self, prefix: str) -> int:
        """Page through SCAN MATCH prefix* until the cursor returns to 0; sum matches."""
        cursor = SCAN_CURSOR_DONE
        count = 0
        while True:
            keys, cursor = await self._keyspace.scan_prefix(prefix, self._page_size, cursor)
            count += len(keys)
            if cursor == SCAN_CURSOR_DONE:
                return count

    async def run(self, categories: Iterable[str]) -> InventoryReport:
        """Count keys for each category.

        Args:
            categories: Category names in reporting order.

        Returns:
            Report with the keyspace size and counts. Categories with no keys
            are omitted from counts (no zero entries).
        """
        total_keys = await self._keyspace.size()
        logger.info("Cache size: %s key(s)", total_keys)
        counts: dict[str, int] = {}
        for category in categories:
            count = await self.count_keys_by_prefix(category_prefix(category))
            logger.info("Count %s: %s", category, count)
            if count > 0:
                counts[category] = count
        return InventoryReport(total_keys=total_keys, counts=counts)
