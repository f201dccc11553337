"""Count cached keys per resource type and print the counts as JSON.

Usage:
    sweeper-count-cache [config-locator]
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from sweeper.application.dtos.sweep import InventoryReport
from sweeper.application.use_cases.inventory_scan import InventoryScanner
from sweeper.core.config import Settings
from sweeper.domain.resource_types import DEFAULT_RESOURCE_TYPES
from sweeper.infrastructure.cache.redis_keyspace import RedisKeyspace, create_redis_client
from sweeper.jobs import run_job


async def run(settings: Settings) -> InventoryReport:
    """Scan the keyspace per category and print the non-zero counts."""
    cfg = settings.inventory
    redis_client = create_redis_client(settings.require_redis())
    try:
        scanner = InventoryScanner(RedisKeyspace(redis_client), page_size=cfg.page_size)
        report = await scanner.run(cfg.categories or DEFAULT_RESOURCE_TYPES)
    finally:
        await redis_client.aclose()
    print(json.dumps(report.counts, indent=2))
    return report


def main(argv: Sequence[str] | None = None) -> int:
    """Console entry point."""
    return run_job("Count Redis cache keys by resource type", run, argv)


if __name__ == "__main__":
    raise SystemExit(main())
