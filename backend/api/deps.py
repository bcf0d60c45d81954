from papersearch.cache.gateway import CacheGateway
from papersearch.clients import get_clients
from papersearch.config import Config
from papersearch.service.orchestrator import SearchOrchestrator
from papersearch.service.search_service import SearchService


def get_search_service() -> SearchService:
    """Return a SearchService over the shared clients (cheap, safe to create per-request)."""
    clients = get_clients()
    if clients.index is None:
        raise RuntimeError("Service clients not initialized. Call init_clients() first.")

    orchestrator = SearchOrchestrator(
        clients.index,
        main_timeout=Config.search.main_timeout,
        facet_timeout=Config.search.facet_timeout,
    )
    cache = CacheGateway(
        clients.redis,
        ttl_seconds=Config.cache.ttl_seconds,
        namespace=Config.cache.namespace,
    )
    return SearchService(orchestrator, cache)


def get_default_limit() -> int:
    return Config.search.default_limit
