"""Pytest configuration and fixtures for the retention sweeper.

Store fakes live in fakes.py (importable from test modules); the relational
adapter is tested against SQLite via aiosqlite.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from fakes import NOW
from sweeper.application.services.retention_policy import RetentionPolicy


@pytest.fixture
def policy() -> RetentionPolicy:
    """30-day retention frozen at NOW."""
    return RetentionPolicy(max_age=timedelta(days=30), now=NOW)


@pytest.fixture
def no_sleep():
    """Recording replacement for asyncio.sleep."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays  # type: ignore[attr-defined]
    return _sleep
