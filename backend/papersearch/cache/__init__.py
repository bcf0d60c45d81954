# papersearch/cache/__init__.py

"""
Response cache module

Provides:
- Redis connection setup
- Canonical cache keys
- Lenient get/set gateway
"""

from .connection import create_redis_client
from .gateway import CacheGateway, canonical_key

__all__ = [
    "create_redis_client",
    "CacheGateway",
    "canonical_key",
]
