from .normalizer import normalize_params
from .filter_compiler import CompiledFilters, FilterClause, compile_filters
from .orchestrator import SearchOrchestrator, SearchOutcome, build_plan
from .composer import compose_response, merge_facets
from .search_service import SearchResult, SearchService

__all__ = [
    "normalize_params",
    "CompiledFilters",
    "FilterClause",
    "compile_filters",
    "SearchOrchestrator",
    "SearchOutcome",
    "build_plan",
    "compose_response",
    "merge_facets",
    "SearchResult",
    "SearchService",
]
