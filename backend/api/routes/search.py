import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse, Response

from api.deps import get_default_limit, get_search_service
from api.schemas.search import ErrorResponse, SearchResponse
from papersearch.index.client import IndexQueryError
from papersearch.service.normalizer import normalize_params
from papersearch.service.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={502: {"model": ErrorResponse}},
)
async def search_papers(
    request: Request,
    background_tasks: BackgroundTasks,
    service: SearchService = Depends(get_search_service),
    default_limit: int = Depends(get_default_limit),
):
    """
    Faceted paper search.

    Query parameters are read raw so repeated keys (venue, year) keep every
    value and malformed numbers are dropped instead of rejected:
    q, venue*, year*, limit, page, facets=venue,year
    """
    search_request = normalize_params(
        request.query_params.multi_items(),
        default_limit=default_limit,
    )

    try:
        result = await service.search(search_request)
    except IndexQueryError as e:
        logger.error(
            "Search failed for %s: %s", service.cache.key_for(search_request), e
        )
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(error=str(e)).model_dump(),
        )

    if not result.cached:
        background_tasks.add_task(service.cache.store, result.cache_key, result.payload)

    return Response(
        content=result.payload,
        media_type="application/json",
        headers={"X-Cache": "HIT" if result.cached else "MISS"},
    )
