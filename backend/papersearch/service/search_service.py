from __future__ import annotations

import logging
from dataclasses import dataclass

from papersearch.cache.gateway import CacheGateway
from papersearch.model.search import SearchRequest
from papersearch.service.composer import compose_response
from papersearch.service.orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    payload: bytes
    cache_key: str
    cached: bool


class SearchService:
    """
    Serves one normalized search request: cache lookup, then on a miss the
    concurrent index queries and response composition.

    Writing a fresh payload back to the cache is left to the caller
    (``cache.store``), so it can happen after the response is sent.
    """

    def __init__(self, orchestrator: SearchOrchestrator, cache: CacheGateway):
        self.orchestrator = orchestrator
        self.cache = cache

    async def search(self, request: SearchRequest) -> SearchResult:
        key = self.cache.key_for(request)

        cached = await self.cache.lookup(key)
        if cached is not None:
            return SearchResult(payload=cached, cache_key=key, cached=True)

        outcome = await self.orchestrator.execute(request)
        payload = compose_response(outcome.main, outcome.facets)
        return SearchResult(payload=payload, cache_key=key, cached=False)
