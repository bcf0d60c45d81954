"""
Query parameter normalization.

Turns the raw (key, value) pairs of a /search request into a canonical
SearchRequest. Parsing is lenient: a malformed numeric value is dropped and
the rest of the request goes through.

Keys:
- q        single, last wins
- venue    repeatable
- year     repeatable, integer
- limit    single, unsigned 64-bit integer
- page     single, unsigned 64-bit integer (1-based)
- facets   single, comma separated subset of venue,year
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from papersearch.index.contract import FACET_FIELDS
from papersearch.model.search import MAX_UNSIGNED, SearchRequest

logger = logging.getLogger(__name__)

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")

_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


def _parse_year(value: str) -> Optional[int]:
    if not _SIGNED_INT.fullmatch(value):
        return None
    year = int(value)
    if not _INT32_MIN <= year <= _INT32_MAX:
        return None
    return year


def _parse_unsigned(value: str) -> Optional[int]:
    if not _UNSIGNED_INT.fullmatch(value):
        return None
    number = int(value)
    if number > MAX_UNSIGNED:
        return None
    return number


def _parse_facets(value: str) -> Tuple[str, ...]:
    names = {name.strip() for name in value.split(",")}
    return tuple(sorted(name for name in names if name in FACET_FIELDS))


def normalize_params(
    params: Iterable[Tuple[str, str]],
    default_limit: int = 20,
) -> SearchRequest:
    q: Optional[str] = None
    venues: List[str] = []
    years: List[int] = []
    limit: Optional[int] = None
    page: Optional[int] = None
    facets: Tuple[str, ...] = ()

    for key, value in params:
        if key == "q":
            q = value
        elif key == "venue":
            venues.append(value)
        elif key == "year":
            year = _parse_year(value)
            if year is None:
                logger.debug("Dropping unparsable year=%r", value)
            else:
                years.append(year)
        elif key == "limit":
            parsed = _parse_unsigned(value)
            if parsed is None:
                logger.debug("Dropping unparsable limit=%r", value)
            else:
                limit = parsed
        elif key == "page":
            parsed = _parse_unsigned(value)
            if parsed is None:
                logger.debug("Dropping unparsable page=%r", value)
            else:
                page = parsed
        elif key == "facets":
            facets = _parse_facets(value)

    return SearchRequest(
        q=q,
        venues=tuple(sorted(venues)),
        years=tuple(sorted(years)),
        venues_as_sent=tuple(venues),
        years_as_sent=tuple(years),
        limit=default_limit if limit is None else limit,
        page=page,
        facets=facets,
    )
