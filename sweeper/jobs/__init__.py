"""Sweep job entry points.

Each job takes one optional positional argument, a config locator, and
exits 0 on success or 1 on any error (message printed to stderr).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from sweeper.core.config import Settings
from sweeper.core.constants import DEFAULT_CONFIG_LOCATOR
from sweeper.infrastructure.config_sources import load_settings
from sweeper.shared.telemetry.logging import setup_logging


def parse_args(description: str, argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the single optional config locator argument."""
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_LOCATOR,
        help=(
            "Config locator: file:<path>, aws:[<region>:]<ssm-path> or env: "
            f"(default: {DEFAULT_CONFIG_LOCATOR})"
        ),
    )
    return parser.parse_args(argv)


def run_job(
    description: str,
    run: Callable[[Settings], Awaitable[Any]],
    argv: Sequence[str] | None = None,
) -> int:
    """Resolve settings once, run the job, and map any error to exit status 1."""
    args = parse_args(description, argv)
    try:
        settings = load_settings(args.config)
        setup_logging(settings.debug)
        asyncio.run(run(settings))
    except Exception as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0
