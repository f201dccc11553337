"""Cross-store deletion: primary table, history table, then cache mirror.

Ordering is fixed: the primary store goes first, so a crash before cache
cleanup leaves a stale cache entry for a missing record (read-repairable)
rather than a cache miss for a record that still exists.

No compensating transaction exists. A failure after the primary delete is
logged, the remaining stores are still attempted, and the batch is then
reported as PartialDeletionException. Nothing is retried here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sweeper.application.dtos.sweep import DeletionOutcome, StoreDeletion
from sweeper.domain.exceptions import PartialDeletionException, SweeperException
from sweeper.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from sweeper.application.interfaces.stores import IDeletionTarget

logger = get_logger(__name__)


class CrossStoreDeleter:
    """Deletes one batch of identifiers from every configured store, in order.

    The first target is the primary store. If it fails nothing has been
    removed and the error propagates unchanged.
    """

    def __init__(self, targets: Sequence["IDeletionTarget"]) -> None:
        if not targets:
            raise ValueError("CrossStoreDeleter needs at least one deletion target")
        self._targets = list(targets)

    @property
    def store_names(self) -> list[str]:
        """Target names in deletion order."""
        return [t.name for t in self._targets]

    async def delete_all(self, ids: Sequence[str]) -> DeletionOutcome:
        """Delete ids from all stores.

        Args:
            ids: Non-empty batch of identifiers. Duplicates are harmless.

        Returns:
            Outcome with one StoreDeletion per target, all succeeded.

        Raises:
            ValueError: If ids is empty.
            SweeperException: If the primary delete fails (nothing removed).
            PartialDeletionException: If the primary succeeded but any later store failed.
        """
        if not ids:
            raise ValueError("ids must be non-empty")
        batch = tuple(ids)
        primary, *secondaries = self._targets

        removed = await primary.delete(batch)
        results = [StoreDeletion(store=primary.name, succeeded=True, removed=removed)]

        for target in secondaries:
            try:
                removed = await target.delete(batch)
            except SweeperException as e:
                logger.error(
                    "Partial deletion: %s store failed after primary delete of %s id(s): %s",
                    target.name,
                    len(batch),
                    e.message,
                )
                results.append(
                    StoreDeletion(store=target.name, succeeded=False, error=e.message)
                )
                continue
            results.append(StoreDeletion(store=target.name, succeeded=True, removed=removed))

        outcome = DeletionOutcome(ids=batch, stores=tuple(results))
        if not outcome.succeeded:
            raise PartialDeletionException(outcome)
        logger.debug("Cross-store delete: %s", outcome.removed_by_store)
        return outcome
