"""Application DTOs: sweep statistics and results."""

from sweeper.application.dtos.sweep import (
    DeletionOutcome,
    InventoryReport,
    QueueCleanResult,
    StoreDeletion,
    SweepResult,
    SweepStats,
)

__all__ = [
    "DeletionOutcome",
    "InventoryReport",
    "QueueCleanResult",
    "StoreDeletion",
    "SweepResult",
    "SweepStats",
]
