"""Domain exceptions for the retention sweeper.

Every failure inside a sweep run propagates to the job entry point, which
prints one diagnostic line and exits non-zero. Exhaustion (empty batch or
iteration cap) is a normal stop and is never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sweeper.application.dtos.sweep import DeletionOutcome


class SweeperException(Exception):
    """Base exception for all sweeper errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. store, operation).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationException(SweeperException):
    """Raised when settings are missing, malformed, or the locator type is unknown.

    Always raised before any sweep begins.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class StoreOperationException(SweeperException):
    """Raised when a store call fails (connection reset, timeout, driver error).

    Not retried by the engine; operators re-run the sweep (deletes are idempotent).
    """

    def __init__(self, store: str, operation: str, reason: str) -> None:
        """Initialize with the failing store and operation.

        Args:
            store: Store name (e.g. 'primary', 'cache', 'queue').
            operation: Operation attempted (e.g. 'fetch_batch', 'delete').
            reason: Underlying error text.
        """
        super().__init__(
            f"{store} store {operation} failed: {reason}",
            "STORE_OPERATION_ERROR",
            {"store": store, "operation": operation, "reason": reason},
        )


class PartialDeletionException(SweeperException):
    """Raised when the primary delete succeeded but a later store failed.

    The outcome records which stores removed the batch; there is no rollback.
    """

    def __init__(self, outcome: DeletionOutcome) -> None:
        self.outcome = outcome
        super().__init__(
            f"Partial cross-store deletion: failed stores {', '.join(outcome.failed_stores)}",
            "PARTIAL_DELETION",
            {
                "failed_stores": outcome.failed_stores,
                "removed_by_store": outcome.removed_by_store,
                "ids": list(outcome.ids),
            },
        )


class SweepInvariantException(SweeperException):
    """Raised when a source returns identifiers already deleted in this run."""

    def __init__(self, repeated_ids: list[str]) -> None:
        super().__init__(
            f"Source returned {len(repeated_ids)} identifier(s) already deleted in this run",
            "SWEEP_INVARIANT_VIOLATION",
            {"repeated_ids": repeated_ids[:20]},
        )
