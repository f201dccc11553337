"""Persistence: async engine factory and relational sweep adapters."""

from sweeper.infrastructure.persistence.database import create_engine_from_settings
from sweeper.infrastructure.persistence.relational_source import (
    RelationalBatchSource,
    TableDeletionTarget,
    audit_deletion_targets,
    sweep_table,
)

__all__ = [
    "RelationalBatchSource",
    "TableDeletionTarget",
    "audit_deletion_targets",
    "create_engine_from_settings",
    "sweep_table",
]
