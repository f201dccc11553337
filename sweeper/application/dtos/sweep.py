"""DTOs for sweep runs: per-run statistics, cross-store outcomes and reports."""

from __future__ import annotations

from dataclasses import dataclass, field

from sweeper.domain.enums import StopReason, SweepState


@dataclass
class SweepStats:
    """Mutable accumulator owned by one sweep run; never persisted."""

    iterations: int = 0
    """Fetch (or clean) calls made so far."""

    scanned: int = 0
    """Identifiers returned by the source across all batches."""

    deleted: int = 0
    """Identifiers removed from the primary store; never decreases."""


@dataclass(frozen=True)
class StoreDeletion:
    """Result of one store's delete call for a batch."""

    store: str
    succeeded: bool
    removed: int = 0
    error: str | None = None


@dataclass(frozen=True)
class DeletionOutcome:
    """Per-store result of CrossStoreDeleter.delete_all for one batch."""

    ids: tuple[str, ...]
    stores: tuple[StoreDeletion, ...]

    @property
    def succeeded(self) -> bool:
        """True when every configured store accepted the delete."""
        return all(s.succeeded for s in self.stores)

    @property
    def failed_stores(self) -> list[str]:
        """Names of stores whose delete call failed, in call order."""
        return [s.store for s in self.stores if not s.succeeded]

    @property
    def removed_by_store(self) -> dict[str, int]:
        """Store name -> number of rows/keys the store reported removed."""
        return {s.store: s.removed for s in self.stores}


@dataclass(frozen=True)
class SweepResult:
    """Final state of a SweepLoop run."""

    state: SweepState
    stop_reason: StopReason
    stats: SweepStats


@dataclass(frozen=True)
class QueueCleanResult:
    """Result of the fixed-iteration queue clean."""

    counts_by_status: dict[str, int]
    """Job status -> count, taken before cleaning."""

    removed_per_iteration: list[int] = field(default_factory=list)
    """Number of job ids each clean call returned (one entry per call)."""

    stats: SweepStats = field(default_factory=SweepStats)
    """Clean calls made and jobs removed."""

    @property
    def total_removed(self) -> int:
        """Total jobs removed across all clean calls."""
        return sum(self.removed_per_iteration)


@dataclass(frozen=True)
class InventoryReport:
    """Result of a cache inventory scan."""

    total_keys: int
    """Size of the whole keyspace (DBSIZE), not only the scanned categories."""

    counts: dict[str, int]
    """Category -> key count; categories with zero keys are absent."""
