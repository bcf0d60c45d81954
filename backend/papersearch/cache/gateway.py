from __future__ import annotations

import hashlib
import json
import logging
from typing import TYPE_CHECKING, Optional

from redis.exceptions import RedisError

from papersearch.model.search import SearchRequest

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def canonical_key(request: SearchRequest, namespace: str) -> str:
    """
    Deterministic cache key for a normalized request.

    The request is serialized with sorted keys and compact separators, so
    equal requests always hash to the same key.
    """
    payload = json.dumps(
        request.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f"{namespace}:{digest}"


class CacheGateway:
    """
    Get/set of composed search payloads in Redis.

    Cache failures never reach the caller: a read error is a miss, a write
    error is logged and dropped. With no Redis client every lookup misses
    and every store is a no-op.
    """

    def __init__(
        self,
        redis: Optional["Redis"],
        ttl_seconds: int = 300,
        namespace: str = "papersearch:search:v1",
    ):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace

    def key_for(self, request: SearchRequest) -> str:
        return canonical_key(request, self.namespace)

    async def lookup(self, key: str) -> Optional[bytes]:
        if self.redis is None:
            return None
        try:
            cached = await self.redis.get(key)
        except RedisError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None

        if cached is None:
            logger.debug("Cache miss: %s", key)
            return None
        logger.debug("Cache hit: %s", key)
        if isinstance(cached, str):
            return cached.encode("utf-8")
        return cached

    async def store(self, key: str, payload: bytes) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.set(key, payload, ex=self.ttl_seconds)
        except RedisError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
