"""
Redis caching for AI provider responses.
"""

import json
import hashlib
from typing import Optional, Any
import logging

import redis

from config.settings import settings
from utils.helpers import truncate_text

logger = logging.getLogger(__name__)

CACHE_PREFIX = "avc:query"


def get_cache_key(prefix: str, *args) -> str:
    """
    Generate a cache key from prefix and arguments.

    Args:
        prefix: Key prefix (e.g., 'avc:query', 'audit')
        *args: Additional arguments to include in key

    Returns:
        str: Generated cache key
    """
    key_parts = [prefix] + [str(arg) for arg in args]
    return ":".join(key_parts)


def hash_query(query: str) -> str:
    """
    Generate a hash for a normalized (lowercased, trimmed) query string.

    Args:
        query: Query string to hash

    Returns:
        str: MD5 hash of the query
    """
    return hashlib.md5(query.lower().strip().encode()).hexdigest()


class ResponseCache:
    """
    Provider response cache keyed by (platform, normalized prompt).

    A missing client or any Redis error behaves like a cache miss, so the
    audit keeps working without Redis.
    """

    def __init__(self, redis_client: Optional[redis.Redis], ttl: Optional[int] = None):
        self.redis_client = redis_client
        self.ttl = ttl or settings.REDIS_CACHE_TTL

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def key_for(self, platform: str, prompt: str) -> str:
        platform_id = getattr(platform, "value", platform)
        return get_cache_key(CACHE_PREFIX, platform_id, hash_query(prompt))

    def get(self, platform: str, prompt: str) -> Optional[dict]:
        """
        Get a cached provider response.

        Returns:
            The stored payload or None if not found
        """
        if not self.enabled:
            return None

        try:
            cached = self.redis_client.get(self.key_for(platform, prompt))
        except redis.RedisError as e:
            logger.warning(f"Cache retrieval failed for {platform}: {e}")
            return None

        if not cached:
            logger.debug(f"Cache MISS for {platform}: {truncate_text(prompt, 50)}")
            return None

        logger.debug(f"Cache HIT for {platform}: {truncate_text(prompt, 50)}")
        if isinstance(cached, bytes):
            cached = cached.decode("utf-8")

        try:
            return json.loads(cached)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable cache entry for {platform}: {e}")
            return None

    def set(self, platform: str, prompt: str, payload: Any) -> bool:
        """
        Cache a provider response.

        Returns:
            bool: True if cached successfully
        """
        if not self.enabled:
            return False

        try:
            self.redis_client.setex(self.key_for(platform, prompt), self.ttl, json.dumps(payload))
            logger.debug(f"Cached response for {platform}: {truncate_text(prompt, 50)}")
            return True
        except (redis.RedisError, TypeError) as e:
            logger.warning(f"Cache storage failed for {platform}: {e}")
            return False

