"""
Public API user flow tests.

Tests mimic what the search screen would call.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from api.main import parse_origins
from conftest import create_sample_page
from movie_finder.state import GENERIC_ERROR_MESSAGE


class TestPopularMoviesFlow:
    """Flow 1: Landing page - popular movies and trending searches"""

    def test_popular_movies(self, api_client, mock_tmdb_client, mock_store):
        """Empty query lists popular movies and records nothing."""
        mock_tmdb_client.add_page("", create_sample_page("Popular", total_pages=500))

        response = api_client.get("/api/v1/movies")

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == ""
        assert data["page"] == 1
        assert data["has_more"] is True
        assert len(data["data"]) == 20
        assert mock_tmdb_client.calls == [("", 1)]
        assert mock_store.recorded == []

    def test_trending(self, api_client, mock_store):
        """Frontend shows trending section."""
        movie = create_sample_page("Batman").results[0]
        mock_store.record_search("batman", movie)
        mock_store.record_search("batman", movie)
        mock_store.record_search("alien", movie)

        response = api_client.get("/api/v1/trending")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [t["search_term"] for t in data] == ["batman", "alien"]
        assert data[0]["count"] == 2
        assert data[0]["poster_url"].endswith(movie.poster_path)

    def test_trending_store_failure_returns_empty(self, api_client, mock_store):
        """Trending degrades to an empty section."""
        mock_store.fail_trending = True

        response = api_client.get("/api/v1/trending")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_trending_limit_validation(self, api_client):
        response = api_client.get("/api/v1/trending?limit=0")
        assert response.status_code == 422


class TestSearchFlow:
    """Flow 2: Search and load more"""

    def test_search_records_top_result(self, api_client, mock_tmdb_client, mock_store):
        """First page of a search counts towards trending."""
        page1 = mock_tmdb_client.add_page("batman", create_sample_page("Batman", 1, total_pages=5))

        response = api_client.get("/api/v1/movies?query=batman&page=1")

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "batman"
        assert data["total_pages"] == 5
        assert data["has_more"] is True
        assert [m["id"] for m in data["data"]] == [m.id for m in page1.results]
        assert mock_store.recorded == [("batman", page1.results[0])]

    def test_next_page_not_recorded(self, api_client, mock_tmdb_client, mock_store):
        """Load more does not count as another search."""
        mock_tmdb_client.add_page("batman", create_sample_page("Batman", 5, total_pages=5))

        response = api_client.get("/api/v1/movies?query=batman&page=5")

        assert response.status_code == 200
        assert response.json()["has_more"] is False
        assert mock_store.recorded == []

    def test_empty_results(self, api_client, mock_tmdb_client, mock_store):
        """No results: empty list and nothing recorded."""
        response = api_client.get("/api/v1/movies?query=zzzzqx")

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert mock_store.recorded == []

    def test_record_failure_still_returns_results(self, api_client, mock_tmdb_client, mock_store):
        mock_tmdb_client.add_page("batman", create_sample_page("Batman"))
        mock_store.fail_record = True

        response = api_client.get("/api/v1/movies?query=batman")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 20

    def test_catalog_failure(self, api_client, mock_tmdb_client):
        """Catalog errors come back as one generic message."""
        mock_tmdb_client.fail = True

        response = api_client.get("/api/v1/movies?query=batman")

        assert response.status_code == 502
        assert response.json() == {
            "error": "catalog_unavailable",
            "message": GENERIC_ERROR_MESSAGE,
        }

    def test_page_validation(self, api_client):
        assert api_client.get("/api/v1/movies?page=0").status_code == 422
        assert api_client.get("/api/v1/movies?page=501").status_code == 422


class TestServiceEndpoints:
    """Health and root"""

    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_request_id_header(self, api_client):
        response = api_client.get("/api/v1/trending")

        assert "X-Request-ID" in response.headers

    def test_parse_origins(self):
        assert parse_origins("http://localhost:5173, https://movies.example.com,") == [
            "http://localhost:5173",
            "https://movies.example.com",
        ]
        assert parse_origins("") == []

    def test_api_log_lines_carry_request_id(self):
        from api.logging_config import RequestIdFilter, logger, request_id_var

        token = request_id_var.set("abc12345")
        try:
            record = logger.makeRecord(logger.name, logging.INFO, __file__, 0, "hello", None, None)
            assert RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc12345"
        assert all(
            any(isinstance(f, RequestIdFilter) for f in handler.filters)
            for handler in logger.handlers
        )


@pytest.fixture
def unreachable_store_client(tmp_path, monkeypatch, mock_tmdb_client):
    """API client whose real search store points at a database that cannot be opened."""
    from api.main import app
    from api import dependencies

    monkeypatch.setenv("TMDB_BEARER_TOKEN", "test-token")
    monkeypatch.setenv("SEARCH_DB_URL", "sqlite:////nonexistent_dir_xyz/search.db")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    dependencies.get_config.cache_clear()
    dependencies.get_tmdb_client.cache_clear()
    dependencies.get_store.cache_clear()

    # Only the catalog is mocked; get_config and get_store run for real
    app.dependency_overrides[dependencies.get_tmdb_client] = lambda: mock_tmdb_client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    dependencies.get_config.cache_clear()
    dependencies.get_store.cache_clear()


class TestStoreOutageFlow:
    """Flow 4: Search keeps working while the search-count store is down"""

    def test_trending_is_empty(self, unreachable_store_client):
        response = unreachable_store_client.get("/api/v1/trending")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_catalog_search_still_works(self, unreachable_store_client, mock_tmdb_client):
        """Recording fails behind the scenes; the results are still returned."""
        mock_tmdb_client.add_page("batman", create_sample_page("Batman"))

        response = unreachable_store_client.get("/api/v1/movies?query=batman")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 20
