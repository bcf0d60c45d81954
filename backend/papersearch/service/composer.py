from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from papersearch.index.client import IndexQueryError
from papersearch.index.contract import FACET_FIELDS
from papersearch.model.search import FacetDistribution, SearchEnvelope

# Facet output of the main query; only the isolated facet queries count.
_MAIN_FACET_KEYS = ("facetDistribution", "facetStats")


def merge_facets(facet_results: Dict[str, Optional[Dict[str, Any]]]) -> FacetDistribution:
    """Collect each field's distribution from its own facet sub-query."""
    combined: FacetDistribution = {}
    for name in FACET_FIELDS:
        result = facet_results.get(name)
        if not result:
            continue
        distribution = result.get("facetDistribution") or {}
        if name in distribution:
            combined[name] = distribution[name]
    return combined


def compose_response(
    main: Dict[str, Any],
    facet_results: Dict[str, Optional[Dict[str, Any]]],
) -> bytes:
    """
    Build the serialized /search payload.

    The returned bytes are exactly what gets cached and sent to the client.

    Raises:
        IndexQueryError: the main result does not match the document contract.
    """
    envelope = {k: v for k, v in main.items() if k not in _MAIN_FACET_KEYS}
    envelope["facetDistribution"] = merge_facets(facet_results)

    try:
        response = SearchEnvelope.model_validate(envelope)
    except ValidationError as e:
        raise IndexQueryError(f"index returned malformed results: {e}") from e

    return response.model_dump_json(by_alias=True, exclude_unset=True).encode("utf-8")
