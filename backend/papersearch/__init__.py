"""
Paginated, faceted search over bibliographic paper records.

Serving path:
- service.normalizer: raw query parameters -> SearchRequest
- service.filter_compiler: SearchRequest -> filter expressions
- cache.gateway: canonical cache keys + Redis get/set
- service.orchestrator: concurrent main / facet queries against Meilisearch
- service.composer: merged response payload
"""

__version__ = "0.1.0"
