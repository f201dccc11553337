"""Cache: Redis keyspace adapter and cache key builders.

Key format is in keys.py so the cross-store deleter and the inventory scan
agree on "<Category>/<Identifier>" (DRY).
"""

from sweeper.infrastructure.cache.keys import category_prefix, resource_key
from sweeper.infrastructure.cache.redis_keyspace import (
    CacheDeletionTarget,
    RedisKeyspace,
    create_redis_client,
)

__all__ = [
    "CacheDeletionTarget",
    "RedisKeyspace",
    "category_prefix",
    "create_redis_client",
    "resource_key",
]
