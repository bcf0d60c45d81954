"""
Process-wide service handles

Responsibilities:
1. Create the Meilisearch and Redis clients once at startup
2. Hand the same handles to every request
3. Close them at shutdown

Usage:
    # startup
    await init_clients(settings)

    # per request
    clients = get_clients()

    # shutdown
    await close_clients()
"""

import logging
from typing import TYPE_CHECKING, Optional
from dataclasses import dataclass

from redis.exceptions import RedisError

from papersearch.cache.connection import create_redis_client
from papersearch.config import Settings
from papersearch.index.client import IndexQueryError, MeiliSearchClient
from papersearch.index.contract import find_drift

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


# ============================================
# Handle container
# ============================================
@dataclass
class ServiceClients:
    """Shared, read-only client handles"""
    index: Optional[MeiliSearchClient] = None
    redis: Optional["Redis"] = None  # type: ignore


_clients: ServiceClients = ServiceClients()


# ============================================
# Startup checks
# ============================================
async def _check_index(index: MeiliSearchClient) -> None:
    """Warn when the index settings no longer match the document contract"""
    try:
        settings = await index.get_settings()
    except IndexQueryError as e:
        logger.warning("Could not read settings of index %r: %s", index.index, e)
        return

    for problem in find_drift(settings):
        logger.warning("Index %r contract drift: %s", index.index, problem)


async def _check_redis(redis: "Redis") -> None:
    try:
        await redis.ping()
    except RedisError as e:
        # caching degrades to always-miss; requests keep working
        logger.warning("Redis unreachable, responses will not be cached: %s", e)
    else:
        logger.info("Redis connected")


# ============================================
# Init & close
# ============================================
async def init_clients(settings: Settings) -> ServiceClients:
    """
    Create all shared clients

    Args:
        settings: application settings

    Returns:
        ServiceClients: handle container
    """
    global _clients

    _clients.index = MeiliSearchClient.from_settings(settings)
    logger.info("Meilisearch client ready: %s (index %r)", settings.meili.url, settings.meili.index)
    await _check_index(_clients.index)

    _clients.redis = create_redis_client(settings)
    if _clients.redis is None:
        logger.info("Response cache disabled (no redis url)")
    else:
        await _check_redis(_clients.redis)

    return _clients


async def close_clients() -> None:
    """Close all shared clients"""
    global _clients

    if _clients.index:
        await _clients.index.close()
        _clients.index = None
        logger.info("Meilisearch client closed")

    if _clients.redis:
        await _clients.redis.aclose()
        _clients.redis = None
        logger.info("Redis disconnected")


def get_clients() -> ServiceClients:
    """Return the shared handle container"""
    return _clients
