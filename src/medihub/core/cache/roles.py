"""Cached role listing and its invalidation signal.

Role mutations register :meth:`RoleListingCache.invalidate` to run after
their transaction commits, so views built from the listing are refetched.
When caching is disabled the signal is still emitted as a log event.
"""

from typing import Annotated, Any

import structlog
from fastapi import Depends
from redis.exceptions import RedisError

from medihub.config import settings
from medihub.core.cache.redis import RedisCache
from medihub.core.constants import ROLE_LISTING_CACHE_KEY


logger = structlog.get_logger()


class RoleListingCache:
    """Stores the serialized role listing under a single Redis key.

    Redis failures are logged and treated as a cache miss; the store
    stays the source of truth.
    """

    def __init__(
        self,
        cache: RedisCache | None = None,
        enabled: bool | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        self.cache = cache or RedisCache(prefix="medihub:")
        self.enabled = settings.cache_enabled if enabled is None else enabled
        self.ttl_seconds = ttl_seconds or settings.cache_ttl

    async def get(self) -> list[dict[str, Any]] | None:
        if not self.enabled:
            return None
        try:
            return await self.cache.get_json(ROLE_LISTING_CACHE_KEY)
        except RedisError as e:
            logger.warning("role_cache_unavailable", operation="get", error=str(e))
            return None

    async def set(self, roles: list[dict[str, Any]]) -> None:
        if not self.enabled:
            return
        try:
            await self.cache.set_json(ROLE_LISTING_CACHE_KEY, roles, self.ttl_seconds)
        except RedisError as e:
            logger.warning("role_cache_unavailable", operation="set", error=str(e))

    async def invalidate(self) -> None:
        """Mark every cached role listing as stale."""
        logger.info("role_cache_invalidated", cache_enabled=self.enabled)
        if not self.enabled:
            return
        try:
            await self.cache.delete(ROLE_LISTING_CACHE_KEY)
        except RedisError as e:
            logger.warning("role_cache_unavailable", operation="invalidate", error=str(e))


def get_role_cache() -> RoleListingCache:
    return RoleListingCache()


# Type alias for dependency injection
RoleCache = Annotated[RoleListingCache, Depends(get_role_cache)]
