from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .paper import PaperRecord

FacetDistribution = Dict[str, Dict[str, int]]

# Largest limit / page / offset the index accepts (unsigned 64-bit).
MAX_UNSIGNED = 2 ** 64 - 1


class SearchRequest(BaseModel):
    """
    Canonical search request.

    Venues and years are kept sorted so that two requests differing only in
    parameter order compare equal and share a cache key. Repeated values are
    kept as-is.

    ``venues_as_sent`` / ``years_as_sent`` hold the same values in the order
    the client sent them. Filters are rendered from these; they are left out
    of ``model_dump`` and of equality, so they never reach the cache key.
    """

    model_config = ConfigDict(frozen=True)

    q: Optional[str] = None
    venues: Tuple[str, ...] = ()
    years: Tuple[int, ...] = ()
    limit: int = 20
    page: Optional[int] = None
    facets: Tuple[str, ...] = ()

    venues_as_sent: Tuple[str, ...] = Field(default=(), exclude=True, repr=False)
    years_as_sent: Tuple[int, ...] = Field(default=(), exclude=True, repr=False)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SearchRequest):
            return NotImplemented
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((self.q, self.venues, self.years, self.limit, self.page, self.facets))

    @property
    def filter_venues(self) -> Tuple[str, ...]:
        return self.venues_as_sent or self.venues

    @property
    def filter_years(self) -> Tuple[int, ...]:
        return self.years_as_sent or self.years

    @property
    def offset(self) -> int:
        if self.page is None or self.page <= 1:
            return 0
        return min((self.page - 1) * self.limit, MAX_UNSIGNED)


class SearchEnvelope(BaseModel):
    """
    Composed search response.

    Keys the index returns but that are not declared here (pagination
    variants, query echo) are carried through unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    hits: List[PaperRecord] = Field(default_factory=list)
    query: Optional[str] = None
    processing_time_ms: Optional[int] = Field(default=None, alias="processingTimeMs")
    limit: Optional[int] = None
    offset: Optional[int] = None
    estimated_total_hits: Optional[int] = Field(default=None, alias="estimatedTotalHits")
    facet_distribution: FacetDistribution = Field(
        default_factory=dict, alias="facetDistribution"
    )
