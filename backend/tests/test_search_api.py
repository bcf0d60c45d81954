"""
End-to-end tests for GET /search through the FastAPI app.

The shared Meilisearch / Redis clients are replaced by fakes via
dependency overrides, so no lifespan (and no network) is involved.
"""

import json
import logging

import pytest
from fastapi.testclient import TestClient

from api.deps import get_default_limit, get_search_service
from main import app
from papersearch.cache.gateway import CacheGateway
from papersearch.service.orchestrator import SearchOrchestrator
from papersearch.service.search_service import SearchService

from fakes import FakeIndex, FakeRedis


@pytest.fixture
def backend():
    index = FakeIndex()
    redis = FakeRedis()

    def override():
        return SearchService(
            SearchOrchestrator(index, main_timeout=1, facet_timeout=1),
            CacheGateway(redis, ttl_seconds=60, namespace="test"),
        )

    app.dependency_overrides[get_search_service] = override
    app.dependency_overrides[get_default_limit] = lambda: 20
    yield index, redis
    app.dependency_overrides.clear()


@pytest.fixture
def client(backend):
    return TestClient(app)


def test_full_example_compiles_expected_queries(client, backend):
    index, _ = backend

    response = client.get(
        "/search?venue=SOSP&venue=OSDI&year=2020&facets=venue,year&limit=5&page=2"
    )

    assert response.status_code == 200
    main = index.main_queries[0]
    assert main.filter == '(venue = "SOSP" OR venue = "OSDI") AND (year = 2020)'
    assert main.limit == 5
    assert main.offset == 5
    assert index.facet_query("venue").filter == "(year = 2020)"
    assert index.facet_query("year").filter == '(venue = "SOSP" OR venue = "OSDI")'

    body = response.json()
    assert set(body["facetDistribution"]) == {"venue", "year"}
    assert body["facetDistribution"]["venue"]["SOSP"] == 30


def test_response_shape(client):
    body = client.get("/search?q=file+system").json()

    assert body["estimatedTotalHits"] == 2
    assert body["limit"] == 20
    assert body["offset"] == 0
    assert body["query"] == "file system"
    hit = body["hits"][0]
    assert set(hit) == {"id", "title", "year", "venue", "authors", "ee_link"}
    assert body["facetDistribution"] == {}


def test_facet_scoping(client, backend):
    index, _ = backend
    body = client.get("/search?facets=venue").json()

    assert list(body["facetDistribution"]) == ["venue"]
    assert index.facet_query("year") is None
    assert len(index.queries) == 2


def test_lenient_year_parsing(client, backend):
    index, _ = backend
    response = client.get("/search?year=abcd&venue=SOSP")

    assert response.status_code == 200
    assert index.main_queries[0].filter == '(venue = "SOSP")'


def test_oversized_limit_falls_back_to_default(client, backend):
    index, _ = backend
    response = client.get("/search?limit=99999999999999999999999&page=99999999999999999999999")

    assert response.status_code == 200
    assert index.main_queries[0].limit == 20
    assert index.main_queries[0].offset == 0


def test_cache_idempotence(client, backend):
    index, redis = backend
    url = "/search?venue=SOSP&year=2020&facets=venue,year"

    first = client.get(url)
    queries_after_first = len(index.queries)
    second = client.get(url)

    assert first.headers["X-Cache"] == "MISS"
    assert second.headers["X-Cache"] == "HIT"
    assert first.content == second.content
    assert len(index.queries) == queries_after_first
    assert len(redis.store) == 1


def test_parameter_order_shares_cache_entry(client, backend):
    index, redis = backend

    client.get("/search?venue=SOSP&venue=OSDI")
    response = client.get("/search?venue=OSDI&venue=SOSP")

    assert response.headers["X-Cache"] == "HIT"
    assert len(index.queries) == 1
    assert len(redis.store) == 1


def test_duplicate_values_get_their_own_cache_entry(client, backend):
    _, redis = backend

    client.get("/search?venue=SOSP")
    response = client.get("/search?venue=SOSP&venue=SOSP")

    assert response.headers["X-Cache"] == "MISS"
    assert len(redis.store) == 2


def test_main_failure_returns_error_and_skips_cache(client, backend):
    index, redis = backend
    index.fail_main = True

    response = client.get("/search?q=raft&facets=venue")

    assert response.status_code == 502
    assert response.json() == {"error": "index returned HTTP 500: boom"}
    assert redis.sets == 0


def test_main_failure_log_names_the_cache_key_not_the_query(client, backend, caplog):
    index, _ = backend
    index.fail_main = True

    with caplog.at_level(logging.ERROR, logger="api.routes.search"):
        client.get("/search?q=private+notes")

    assert "Search failed for test:" in caplog.text
    assert "private notes" not in caplog.text


def test_facet_failure_still_succeeds(client, backend):
    index, _ = backend
    index.fail_facets = ["year"]

    response = client.get("/search?facets=venue,year")

    assert response.status_code == 200
    assert list(response.json()["facetDistribution"]) == ["venue"]


def test_cache_outage_does_not_fail_requests(client, backend):
    index, redis = backend
    redis.fail = True

    first = client.get("/search?q=raft")
    second = client.get("/search?q=raft")

    assert first.status_code == second.status_code == 200
    assert first.headers["X-Cache"] == second.headers["X-Cache"] == "MISS"
    assert json.loads(first.content) == json.loads(second.content)
    assert len(index.main_queries) == 2


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
