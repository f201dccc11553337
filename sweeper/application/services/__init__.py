"""Application services: retention policy and cross-store deletion."""

from sweeper.application.services.cross_store_deleter import CrossStoreDeleter
from sweeper.application.services.retention_policy import RetentionPolicy

__all__ = ["CrossStoreDeleter", "RetentionPolicy"]
