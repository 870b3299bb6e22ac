"""
Orca Payroll - Cache Service

Redis-based caching for the reporting context (reporting currency and
exchange rates) read by every dashboard load.

Redis is optional: every failure is logged and treated as a cache miss.
"""

import json
import logging
from typing import Any, Optional, Dict

import redis.asyncio as redis

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class CacheService:
    """Redis-based caching service."""

    # Cache key prefixes
    PREFIX_SETTINGS = "orca:settings"

    # Default TTL values (in seconds)
    TTL_REPORTING_CONTEXT = 300

    def __init__(self, redis_url: Optional[str] = None, enabled: Optional[bool] = None):
        self.redis_url = redis_url or settings.redis_url
        self.enabled = settings.settings_cache_enabled if enabled is None else enabled
        self._client: Optional[redis.Redis] = None

    async def get_client(self) -> redis.Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def close(self):
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None

    # =========================================================================
    # GENERIC CACHE OPERATIONS
    # =========================================================================

    async def get(self, key: str) -> Optional[str]:
        """Get a value from cache."""
        if not self.enabled:
            return None
        try:
            client = await self.get_client()
            return await client.get(key)
        except Exception as e:
            logger.warning(f"Cache get failed for {key}: {e}")
            return None

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None,
    ) -> bool:
        """Set a value in cache with optional TTL."""
        if not self.enabled:
            return False
        try:
            client = await self.get_client()
            if ttl:
                await client.setex(key, ttl, value)
            else:
                await client.set(key, value)
            return True
        except Exception as e:
            logger.warning(f"Cache set failed for {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete a key from cache."""
        if not self.enabled:
            return False
        try:
            client = await self.get_client()
            await client.delete(key)
            return True
        except Exception as e:
            logger.warning(f"Cache delete failed for {key}: {e}")
            return False

    async def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """Get a JSON value from cache."""
        value = await self.get(key)
        if value:
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON in cache for {key}")
        return None

    async def set_json(
        self,
        key: str,
        value: Dict[str, Any],
        ttl: Optional[int] = None,
    ) -> bool:
        """Set a JSON value in cache."""
        try:
            return await self.set(key, json.dumps(value, default=str), ttl)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cache set_json failed for {key}: {e}")
            return False

    # =========================================================================
    # REPORTING CONTEXT CACHING
    # =========================================================================

    def _reporting_context_key(self) -> str:
        return f"{self.PREFIX_SETTINGS}:reporting_context"

    async def get_reporting_context(self) -> Optional[Dict[str, Any]]:
        """Get the cached reporting context payload."""
        return await self.get_json(self._reporting_context_key())

    async def set_reporting_context(
        self,
        payload: Dict[str, Any],
        ttl: Optional[int] = None,
    ) -> bool:
        """Cache the reporting context payload."""
        return await self.set_json(
            self._reporting_context_key(),
            payload,
            ttl or settings.settings_cache_ttl_seconds or self.TTL_REPORTING_CONTEXT,
        )

    async def invalidate_reporting_context(self) -> bool:
        """Drop the cached reporting context after a settings write."""
        deleted = await self.delete(self._reporting_context_key())
        if deleted:
            logger.info("Invalidated reporting context cache")
        return deleted

    # =========================================================================
    # HEALTH
    # =========================================================================

    async def health_check(self) -> Dict[str, Any]:
        """Check Redis connection health."""
        if not self.enabled:
            return {"status": "disabled"}
        try:
            client = await self.get_client()
            await client.ping()
            return {"status": "healthy"}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}


# Global cache service instance
_cache_service: Optional[CacheService] = None


def get_cache_service() -> CacheService:
    """Get the global cache service instance."""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService()
    return _cache_service


async def close_cache_service():
    """Close the global cache service."""
    global _cache_service
    if _cache_service:
        await _cache_service.close()
        _cache_service = None
