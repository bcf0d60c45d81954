"""
Tests for query parameter normalization.
"""

from papersearch.cache.gateway import canonical_key
from papersearch.model.search import SearchRequest
from papersearch.service.normalizer import normalize_params


def test_empty_params_give_defaults():
    request = normalize_params([])

    assert request == SearchRequest()
    assert request.q is None
    assert request.limit == 20
    assert request.page is None
    assert request.offset == 0
    assert request.facets == ()


def test_venue_order_does_not_matter():
    a = normalize_params([("venue", "SOSP"), ("venue", "OSDI")])
    b = normalize_params([("venue", "OSDI"), ("venue", "SOSP")])

    assert a == b
    assert a.venues == ("OSDI", "SOSP")
    assert canonical_key(a, "ns") == canonical_key(b, "ns")


def test_years_are_sorted():
    request = normalize_params([("year", "2021"), ("year", "2019"), ("year", "2020")])
    assert request.years == (2019, 2020, 2021)


def test_repeated_values_are_not_deduplicated():
    # Duplicates are only sorted, never collapsed, so they change the key.
    single = normalize_params([("venue", "SOSP")])
    doubled = normalize_params([("venue", "SOSP"), ("venue", "SOSP")])

    assert doubled.venues == ("SOSP", "SOSP")
    assert doubled != single
    assert canonical_key(doubled, "ns") != canonical_key(single, "ns")


def test_malformed_year_is_dropped():
    request = normalize_params([("year", "abcd"), ("year", "2020"), ("venue", "SOSP")])

    assert request.years == (2020,)
    assert request.venues == ("SOSP",)


def test_year_parsing_is_strict():
    request = normalize_params(
        [("year", " 2020"), ("year", "2_020"), ("year", "20.5"), ("year", "99999999999"), ("year", "-1")]
    )
    assert request.years == (-1,)


def test_malformed_limit_falls_back_to_default():
    assert normalize_params([("limit", "ten")]).limit == 20
    assert normalize_params([("limit", "-5")]).limit == 20
    assert normalize_params([("limit", "99999999999999999999999")]).limit == 20
    assert normalize_params([("limit", str(2 ** 64))]).limit == 20
    assert normalize_params([("limit", str(2 ** 64 - 1))]).limit == 2 ** 64 - 1
    assert normalize_params([("limit", "ten")], default_limit=50).limit == 50
    assert normalize_params([("limit", "7")]).limit == 7


def test_malformed_page_is_absent():
    request = normalize_params([("page", "two")])
    assert request.page is None
    assert request.offset == 0

    oversized = normalize_params([("page", "99999999999999999999999"), ("limit", "5")])
    assert oversized.page is None
    assert oversized.offset == 0


def test_q_last_wins():
    request = normalize_params([("q", "raft"), ("q", "paxos")])
    assert request.q == "paxos"


def test_facets_are_split_trimmed_and_filtered():
    request = normalize_params([("facets", " year , venue,,authors ")])
    assert request.facets == ("venue", "year")


def test_facets_last_wins():
    request = normalize_params([("facets", "venue,year"), ("facets", "year")])
    assert request.facets == ("year",)


def test_unknown_keys_are_ignored():
    request = normalize_params([("sort", "year:desc"), ("venue", "NSDI")])
    assert request == SearchRequest(venues=("NSDI",))


def test_offset_from_page_and_limit():
    assert normalize_params([]).offset == 0
    assert normalize_params([("page", "1")]).offset == 0
    assert normalize_params([("page", "0")]).offset == 0
    assert normalize_params([("page", "3"), ("limit", "10")]).offset == 20
    assert normalize_params([("page", "2"), ("limit", "5")]).offset == 5


def test_offset_saturates_at_the_unsigned_maximum():
    largest = str(2 ** 64 - 1)
    request = normalize_params([("page", largest), ("limit", largest)])
    assert request.offset == 2 ** 64 - 1


def test_sent_order_is_kept_outside_the_canonical_form():
    request = normalize_params(
        [("venue", "SOSP"), ("venue", "OSDI"), ("year", "2021"), ("year", "2019")]
    )
    swapped = normalize_params(
        [("venue", "OSDI"), ("venue", "SOSP"), ("year", "2019"), ("year", "2021")]
    )

    assert request.venues_as_sent == ("SOSP", "OSDI")
    assert request.years_as_sent == (2021, 2019)
    assert "venues_as_sent" not in request.model_dump()
    assert hash(request) == hash(swapped)
