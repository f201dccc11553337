"""Clean completed jobs from the subscription queue.

Usage:
    uv run python -m scripts.clean_subscription_queue [config-locator]
If config-locator is omitted, uses file:sweeper.config.json.
"""

from sweeper.jobs.clean_subscription_queue import main

if __name__ == "__main__":
    raise SystemExit(main())
