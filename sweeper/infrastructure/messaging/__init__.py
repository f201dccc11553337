"""Messaging: BullMQ job queue adapter."""

from sweeper.infrastructure.messaging.job_queue import BullJobQueue

__all__ = ["BullJobQueue"]
