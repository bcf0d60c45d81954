"""
Index contract shared with the ingestion / sync jobs.

The sync job declares these attributes on the Meilisearch index; the filter
compiler and the startup drift check read them from here.
"""

from typing import Dict, List, Tuple

# Filterable fields, in the order their clauses are ANDed together.
VENUE = "venue"
YEAR = "year"
FILTERABLE_FIELDS: Tuple[str, ...] = (VENUE, YEAR)
NUMERIC_FIELDS = frozenset({YEAR})

# Fields a client may request facets for.
FACET_FIELDS: Tuple[str, ...] = FILTERABLE_FIELDS

SORTABLE_ATTRIBUTES: Tuple[str, ...] = (YEAR,)
SEARCHABLE_ATTRIBUTES: Tuple[str, ...] = ("title", "authors", "venue")


def find_drift(settings: Dict) -> List[str]:
    """
    Compare index settings as returned by Meilisearch with the contract.

    Returns a human-readable problem per mismatch, empty when the index
    matches.
    """
    problems = []

    filterable = set(settings.get("filterableAttributes") or [])
    missing = [f for f in FILTERABLE_FIELDS if f not in filterable]
    if missing:
        problems.append(f"not filterable: {', '.join(missing)}")

    sortable = set(settings.get("sortableAttributes") or [])
    missing = [f for f in SORTABLE_ATTRIBUTES if f not in sortable]
    if missing:
        problems.append(f"not sortable: {', '.join(missing)}")

    searchable = settings.get("searchableAttributes") or []
    # "*" means every attribute is searchable
    if "*" not in searchable:
        missing = [f for f in SEARCHABLE_ATTRIBUTES if f not in searchable]
        if missing:
            problems.append(f"not searchable: {', '.join(missing)}")

    return problems
