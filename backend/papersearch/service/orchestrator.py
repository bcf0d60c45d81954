"""
Concurrent main / facet query execution.

For one request this runs up to three index queries at once:

1. the main query (hits, paging), always issued and mandatory
2. a venue facet query, only when the venue facet was requested
3. a year facet query, only when the year facet was requested

Facet queries ask for zero hits and use the isolated filter for their field,
so a facet still reports every value of its own field given the other
constraints. A failed or timed-out facet query only drops that facet; a failed
main query fails the request.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from papersearch.index.client import IndexQuery, IndexQueryError
from papersearch.index.contract import FACET_FIELDS
from papersearch.model.search import SearchRequest
from papersearch.service.filter_compiler import CompiledFilters, compile_filters

logger = logging.getLogger(__name__)


class SearchIndex(Protocol):
    async def search(self, query: IndexQuery) -> Dict[str, Any]: ...


@dataclass
class SearchOutcome:
    main: Dict[str, Any]
    # facet field -> raw facet query result, None when the query failed
    facets: Dict[str, Optional[Dict[str, Any]]] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryPlan:
    main: IndexQuery
    facets: Dict[str, IndexQuery]


def build_plan(request: SearchRequest, filters: Optional[CompiledFilters] = None) -> QueryPlan:
    filters = filters or compile_filters(request)

    main = IndexQuery(
        text=request.q,
        filter=filters.main,
        limit=request.limit,
        offset=request.offset,
    )
    facets = {
        name: IndexQuery(
            text=request.q,
            filter=filters.isolated.get(name),
            limit=0,
            offset=0,
            facets=[name],
        )
        for name in FACET_FIELDS
        if name in request.facets
    }
    return QueryPlan(main=main, facets=facets)


class SearchOrchestrator:
    def __init__(
        self,
        index: SearchIndex,
        main_timeout: float = 5.0,
        facet_timeout: float = 3.0,
    ):
        self.index = index
        self.main_timeout = main_timeout
        self.facet_timeout = facet_timeout

    async def _run_main(self, query: IndexQuery) -> Dict[str, Any]:
        try:
            return await asyncio.wait_for(self.index.search(query), self.main_timeout)
        except asyncio.TimeoutError as e:
            raise IndexQueryError(
                f"main query timed out after {self.main_timeout:g}s"
            ) from e

    async def _run_facet(self, name: str, query: IndexQuery) -> Optional[Dict[str, Any]]:
        try:
            return await asyncio.wait_for(self.index.search(query), self.facet_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Facet query for %r timed out after %gs, omitting facet",
                name,
                self.facet_timeout,
            )
        except IndexQueryError as e:
            logger.warning("Facet query for %r failed, omitting facet: %s", name, e)
        return None

    async def execute(self, request: SearchRequest) -> SearchOutcome:
        """
        Run the main query and the requested facet queries concurrently.

        Raises:
            IndexQueryError: the main query failed or timed out.
        """
        plan = build_plan(request)

        main_task = asyncio.create_task(self._run_main(plan.main))
        facet_tasks = {
            name: asyncio.create_task(self._run_facet(name, query))
            for name, query in plan.facets.items()
        }
        tasks = [main_task, *facet_tasks.values()]

        try:
            main = await main_task
            results = await asyncio.gather(*facet_tasks.values())
        except BaseException:
            # nothing left to compose for: drop whatever is still running
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return SearchOutcome(main=main, facets=dict(zip(facet_tasks.keys(), results)))
