from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from papersearch.model.paper import PaperRecord


# --- Success ---

class SearchResponse(BaseModel):
    """Shape of a /search response, for the OpenAPI docs."""
    hits: List[PaperRecord]
    query: Optional[str] = None
    processingTimeMs: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    estimatedTotalHits: Optional[int] = None
    facetDistribution: Dict[str, Dict[str, int]] = Field(default_factory=dict)


# --- Failure ---

class ErrorResponse(BaseModel):
    error: str
