"""Retention sweeper: bounded batch deletion across Postgres, Redis and BullMQ."""

__version__ = "1.0.0"
