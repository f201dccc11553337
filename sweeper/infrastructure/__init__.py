"""Infrastructure adapters: Postgres, Redis, BullMQ and configuration sources."""
