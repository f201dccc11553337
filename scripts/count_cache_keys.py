"""Count Redis cache keys by resource type.

Usage:
    uv run python -m scripts.count_cache_keys [config-locator]
If config-locator is omitted, uses file:sweeper.config.json.
"""

from sweeper.jobs.count_cache_keys import main

if __name__ == "__main__":
    raise SystemExit(main())
