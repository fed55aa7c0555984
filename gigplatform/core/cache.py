"""
gigplatform/core/cache.py

Cache Helpers
Key builders and pattern invalidation shared by services that cache
read-mostly data in Redis. Cache errors are logged and never propagated.
"""

import logging
from typing import Any

from gigplatform.core.config import settings

logger = logging.getLogger(__name__)

CACHE_PREFIX = settings.CACHE_PREFIX
DEFAULT_CACHE_TTL = settings.DEFAULT_CACHE_TTL


def _paginated_cache_key(namespace: str, identifier: Any, skip: int, limit: int) -> str:
    """Generate a cache key for paginated data."""
    return f"{CACHE_PREFIX}{namespace}:{identifier}:skip={skip}:limit={limit}"


async def _invalidate_pattern(cache: Any, pattern: str) -> None:
    """Delete Redis keys matching the given pattern."""
    if not cache:
        return
    logger.debug(f"[CACHE ASYNC] Scanning pattern: {pattern}")
    deleted = 0
    try:
        async for key in cache.scan_iter(match=pattern):
            await cache.delete(key)
            deleted += 1
        logger.info(f"[CACHE ASYNC] Deleted {deleted} keys matching pattern {pattern}")
    except Exception as e:
        logger.error(f"[CACHE ASYNC ERROR] Failed pattern deletion for {pattern}: {e}")
