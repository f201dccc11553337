"""Redis keyspace adapter: prefix SCAN, multi-key DEL and DBSIZE.

Errors are not swallowed: every redis.RedisError becomes a
StoreOperationException so the sweep aborts loudly.
"""

from __future__ import annotations

from collections.abc import Sequence

import redis.asyncio as redis

from sweeper.core.config import RedisSettings
from sweeper.core.constants import STORE_CACHE
from sweeper.domain.exceptions import StoreOperationException
from sweeper.infrastructure.cache.keys import resource_key
from sweeper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def create_redis_client(settings: RedisSettings) -> redis.Redis:
    """Build an async Redis client from resolved settings (not yet connected)."""
    return redis.Redis(
        host=settings.host,
        port=settings.port,
        db=settings.db,
        password=settings.password.get_secret_value() if settings.password else None,
        ssl=settings.tls,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_keepalive=True,
    )


class RedisKeyspace:
    """Async Redis keyspace used for inventory scans and cache deletes.

    Pass a redis_client for DI/testing; the owner closes it.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        self.redis = redis_client

    async def scan_prefix(
        self, prefix: str, page_size: int, cursor: int = 0
    ) -> tuple[list[str], int]:
        """One SCAN page over prefix*; cursor 0 in the result means done.

        Args:
            prefix: Key prefix (e.g. 'Patient/').
            page_size: COUNT hint for the server.
            cursor: Cursor from the previous page; 0 to start.

        Returns:
            (matched keys, next cursor).
        """
        try:
            next_cursor, keys = await self.redis.scan(
                cursor=cursor, match=f"{prefix}*", count=page_size
            )
        except redis.RedisError as e:
            raise StoreOperationException(STORE_CACHE, "scan", str(e)) from e
        return list(keys), int(next_cursor)

    async def delete_keys(self, keys: Sequence[str]) -> int:
        """Delete keys with a single multi-key DEL; missing keys are ignored."""
        if not keys:
            raise ValueError("keys must be non-empty")
        try:
            removed = await self.redis.delete(*keys)
        except redis.RedisError as e:
            raise StoreOperationException(STORE_CACHE, "delete", str(e)) from e
        logger.debug("Cache DELETE: %s key(s) requested, %s removed", len(keys), removed)
        return int(removed or 0)

    async def size(self) -> int:
        """Number of keys in the selected database (DBSIZE)."""
        try:
            return int(await self.redis.dbsize())
        except redis.RedisError as e:
            raise StoreOperationException(STORE_CACHE, "dbsize", str(e)) from e


class CacheDeletionTarget:
    """Deletion target for the cache mirror of one resource category.

    Deletes every "<category>/<id>" key of a batch, even when the keys were
    never cached, so no stale entry outlives the primary row.
    """

    def __init__(self, keyspace: RedisKeyspace, category: str, name: str = STORE_CACHE) -> None:
        self.keyspace = keyspace
        self.category = category
        self.name = name

    async def delete(self, ids: Sequence[str]) -> int:
        """Delete the cache entries of ids; return number of keys removed."""
        return await self.keyspace.delete_keys([resource_key(self.category, i) for i in ids])
