"""Cache module for Redis-backed caching.

Provides:
- Redis client connection management
- The cached role listing and its invalidation signal
"""

from medihub.core.cache.redis import RedisCache, close_redis_pool, redis_client
from medihub.core.cache.roles import RoleCache, RoleListingCache, get_role_cache


__all__ = [
    "RedisCache",
    "RoleCache",
    "RoleListingCache",
    "close_redis_pool",
    "get_role_cache",
    "redis_client",
]
