"""Purge aged audit events from Postgres and Redis.

Usage:
    uv run python -m scripts.purge_audit_events [config-locator]
If config-locator is omitted, uses file:sweeper.config.json.
"""

from sweeper.jobs.purge_audit_events import main

if __name__ == "__main__":
    raise SystemExit(main())
