# papersearch/cache/connection.py

"""
Redis connection for the response cache
"""

from typing import Optional

from redis.asyncio import Redis

from papersearch.config import Settings


def create_redis_client(settings: Settings) -> Optional[Redis]:
    """
    Build the async Redis client, or None when caching is disabled

    Cached payloads are raw bytes, so responses are not decoded.
    """
    if not settings.redis.url:
        return None

    return Redis.from_url(
        settings.redis.url,
        decode_responses=False,
        socket_timeout=settings.redis.socket_timeout,
        socket_connect_timeout=settings.redis.socket_timeout,
    )
