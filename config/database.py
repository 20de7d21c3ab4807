"""
Redis connection management.

The application builds one Redis client at startup and hands it to the
response cache and the audit store; nothing here keeps a module-level
client.
"""

import redis
from redis import ConnectionPool
from typing import Optional
import logging

from config.settings import settings

logger = logging.getLogger(__name__)


def create_redis_client() -> Optional[redis.Redis]:
    """
    Create a Redis client with connection pooling.

    Returns:
        redis.Redis: Connected Redis client, or None if Redis is unreachable
        (caching and persistence are then disabled)
    """
    pool = ConnectionPool(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        db=settings.REDIS_DB,
        password=settings.REDIS_PASSWORD,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True,  # Automatically decode bytes to strings
        socket_connect_timeout=5,
        socket_timeout=5
    )
    client = redis.Redis(connection_pool=pool)

    try:
        client.ping()
        logger.info(f"Connected to Redis at {settings.REDIS_HOST}:{settings.REDIS_PORT}")
        return client
    except redis.RedisError as e:
        logger.warning(f"Redis not reachable, caching disabled: {e}")
        pool.disconnect()
        return None


def test_connection(client: Optional[redis.Redis]) -> dict:
    """
    Test the Redis connection.

    Returns:
        dict: Connection status and error message, if any
    """
    status = {"connected": False, "error": None}

    if client is None:
        status["error"] = "Redis client not configured"
        return status

    try:
        client.ping()
        status["connected"] = True
    except redis.RedisError as e:
        status["error"] = str(e)

    return status


def close_connection(client: Optional[redis.Redis]) -> None:
    """
    Close a Redis client and its pool gracefully.
    Call this on application shutdown.
    """
    if client is None:
        return

    try:
        client.close()
        client.connection_pool.disconnect()
        logger.info("Closed Redis connection")
    except redis.RedisError as e:
        logger.error(f"Error closing Redis connection: {e}")
