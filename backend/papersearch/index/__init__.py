from .client import IndexQuery, IndexQueryError, MeiliSearchClient

__all__ = ["IndexQuery", "IndexQueryError", "MeiliSearchClient"]
