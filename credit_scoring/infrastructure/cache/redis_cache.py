"""Redis-backed score cache with shared connection pooling"""

import logging
import threading
from typing import Optional
import redis
from credit_scoring.config import settings
from credit_scoring.domain.exceptions import CacheError

logger = logging.getLogger(__name__)

# Global connection pool - created lazily
_pool: Optional[redis.ConnectionPool] = None
_pool_lock = threading.Lock()


def build_connection_pool() -> redis.ConnectionPool:
    options = {
        "decode_responses": True,
        "socket_timeout": settings.redis_socket_timeout_seconds,
        "socket_connect_timeout": settings.redis_socket_timeout_seconds,
    }
    # A password embedded in the URL takes precedence
    if settings.redis_password:
        options["password"] = settings.redis_password
    return redis.ConnectionPool.from_url(settings.redis_url, **options)


def get_redis_client() -> redis.Redis:
    """Get a Redis client backed by the shared connection pool"""
    global _pool
    if _pool is None:
        with _pool_lock:
            if _pool is None:
                _pool = build_connection_pool()
                logger.info("Created Redis connection pool", extra={"redis_url": settings.redis_url})
    return redis.Redis(connection_pool=_pool)


class RedisCache:
    """Key-value cache over Redis; every failure surfaces as CacheError"""

    def __init__(self, client: Optional[redis.Redis] = None):
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis_client()
        return self._client

    def get(self, key: str) -> Optional[str]:
        """Return the cached value, or None on a miss"""
        try:
            return self.client.get(key)
        except redis.RedisError as e:
            raise CacheError(f"Redis GET {key} failed: {e}") from e

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self.client.set(key, value, ex=ttl_seconds)
        except redis.RedisError as e:
            raise CacheError(f"Redis SET {key} failed: {e}") from e

    def delete(self, key: str) -> None:
        """Remove a key; deleting a missing key is not an error"""
        try:
            self.client.delete(key)
        except redis.RedisError as e:
            raise CacheError(f"Redis DEL {key} failed: {e}") from e
