from .paper import PaperRecord
from .search import FacetDistribution, SearchEnvelope, SearchRequest

__all__ = [
    "PaperRecord",
    "FacetDistribution",
    "SearchEnvelope",
    "SearchRequest",
]
