from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from papersearch.index.contract import FILTERABLE_FIELDS, NUMERIC_FIELDS, VENUE, YEAR
from papersearch.model.search import SearchRequest


@dataclass(frozen=True)
class FilterClause:
    """An OR group of equality terms on a single field."""

    field: str
    terms: Tuple[str, ...]

    def render(self) -> str:
        return "(" + " OR ".join(f"{self.field} = {t}" for t in self.terms) + ")"


@dataclass(frozen=True)
class CompiledFilters:
    """
    Filters for one request.

    ``isolated`` has one entry per requested facet field: the filter for
    that facet's sub-query, built from every clause except the field's own.
    ``None`` means "no filter".
    """

    main: Optional[str]
    isolated: Dict[str, Optional[str]] = field(default_factory=dict)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _render_term(field_name: str, value: Union[str, int]) -> str:
    if field_name in NUMERIC_FIELDS:
        return str(int(value))
    return _quote(str(value))


def build_clauses(request: SearchRequest) -> Dict[str, FilterClause]:
    """One clause per filterable field that has at least one value."""
    values: Dict[str, Sequence[Union[str, int]]] = {
        VENUE: request.filter_venues,
        YEAR: request.filter_years,
    }
    clauses = {}
    for name in FILTERABLE_FIELDS:
        field_values = values.get(name) or ()
        if field_values:
            clauses[name] = FilterClause(
                field=name,
                terms=tuple(_render_term(name, v) for v in field_values),
            )
    return clauses


def join_clauses(clauses: List[FilterClause]) -> Optional[str]:
    if not clauses:
        return None
    return " AND ".join(c.render() for c in clauses)


def compile_filters(request: SearchRequest) -> CompiledFilters:
    clauses = build_clauses(request)
    ordered = [clauses[name] for name in FILTERABLE_FIELDS if name in clauses]

    isolated = {
        facet: join_clauses([c for c in ordered if c.field != facet])
        for facet in request.facets
    }
    return CompiledFilters(main=join_clauses(ordered), isolated=isolated)
