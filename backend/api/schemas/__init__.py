from .search import (
    ErrorResponse,
    SearchResponse,
)

__all__ = [
    "ErrorResponse",
    "SearchResponse",
]
