"""Async SQLAlchemy engine for sweep jobs.

One engine per job run, created from resolved settings and disposed by the
job on every exit path. A small pool is enough: sweeps are sequential.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from sweeper.core.config import DatabaseSettings


def create_engine_from_settings(settings: DatabaseSettings, *, echo: bool = False) -> AsyncEngine:
    """Create the async engine (asyncpg for Postgres)."""
    url = settings.sqlalchemy_url()
    connect_args: dict[str, Any] = {}
    if "postgresql" in str(url):
        connect_args["command_timeout"] = settings.command_timeout
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=2,
        max_overflow=0,
        connect_args=connect_args,
    )
