"""
Shared fixtures for Movie Finder tests.

Provides mock catalog client, mock search-count store, fake timers and sample data.
"""

import pytest
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from movie_finder.config import Config
from movie_finder.controller import SearchController
from movie_finder.exceptions import CatalogError, StoreError
from movie_finder.models import Movie, MoviePage, TrendingSearch


# =============================================================================
# SAMPLE DATA
# =============================================================================

def create_sample_movie(movie_id: int, title: str, popularity: float = 50.0) -> Movie:
    """Create a sample Movie for testing."""
    return Movie(
        id=movie_id,
        title=title,
        poster_path=f"/poster_{movie_id}.jpg",
        popularity=popularity,
        vote_average=7.5,
        vote_count=1000,
        release_date="2008-07-18",
        original_language="en",
        overview=f"This is the overview for {title}.",
    )


def create_sample_page(
    title: str,
    page: int = 1,
    total_pages: int = 5,
    count: int = 20,
) -> MoviePage:
    """Create a page of `count` movies whose ids are unique across pages."""
    base_id = page * 1000
    return MoviePage(
        results=[
            create_sample_movie(base_id + i, f"{title} {page}-{i}")
            for i in range(count)
        ],
        page=page,
        total_pages=total_pages,
        total_results=total_pages * count,
    )


def tmdb_payload(movie_page: MoviePage) -> dict:
    """Raw TMDB JSON body for a MoviePage."""
    return {
        "page": movie_page.page,
        "results": [m.to_dict() for m in movie_page.results],
        "total_pages": movie_page.total_pages,
        "total_results": movie_page.total_results,
    }


# =============================================================================
# MOCK TMDB CLIENT
# =============================================================================

class MockTMDBClient:
    """Mock catalog client that serves canned pages."""

    def __init__(self):
        self.pages: Dict[Tuple[str, int], MoviePage] = {}
        self.calls: List[Tuple[str, int]] = []
        self.fail = False
        # Called while a request is "in flight", before its response returns
        self.in_flight: Dict[Tuple[str, int], Callable[[], None]] = {}

    def add_page(self, query: str, movie_page: MoviePage) -> MoviePage:
        self.pages[(query, movie_page.page)] = movie_page
        return movie_page

    def fetch_movies(self, query: str = "", page: int = 1) -> MoviePage:
        self.calls.append((query, page))
        hook = self.in_flight.pop((query, page), None)
        if hook:
            hook()
        if self.fail:
            raise CatalogError("Failed to fetch movies", status_code=500)
        return self.pages.get((query, page), MoviePage(results=[], page=page, total_pages=0))

    def test_connection(self) -> bool:
        return not self.fail


# =============================================================================
# MOCK SEARCH STORE
# =============================================================================

class MockSearchStore:
    """In-memory search-count store."""

    def __init__(self):
        self.records: Dict[str, TrendingSearch] = {}
        self.recorded: List[Tuple[str, Movie]] = []
        self.fail_record = False
        self.fail_trending = False
        self._next_id = 1

    def create_tables(self) -> dict:
        return {"created": [], "existing": ["search_terms"]}

    def record_search(self, search_term: str, movie: Movie) -> TrendingSearch:
        if self.fail_record:
            raise StoreError("store is down")
        self.recorded.append((search_term, movie))
        record = self.records.get(search_term)
        if record:
            record.count += 1
        else:
            record = TrendingSearch(
                id=self._next_id,
                search_term=search_term,
                count=1,
                movie_id=movie.id,
                title=movie.title,
                poster_url=movie.get_poster_url(),
            )
            self._next_id += 1
            self.records[search_term] = record
        return record

    def get_search(self, search_term: str) -> Optional[TrendingSearch]:
        return self.records.get(search_term)

    def get_trending(self, limit: int = 5) -> List[TrendingSearch]:
        if self.fail_trending:
            raise StoreError("store is down")
        ranked = sorted(self.records.values(), key=lambda r: r.count, reverse=True)
        return ranked[:limit]


# =============================================================================
# FAKE TIMERS
# =============================================================================

class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval: float, function: Callable[[], None]):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.started and not self.cancelled and not self.fired:
            self.fired = True
            self.function()


class FakeTimerFactory:
    """Collects FakeTimers so tests can let the quiet period pass."""

    def __init__(self):
        self.timers: List[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[FakeTimer]:
        return [t for t in self.timers if t.started and not t.cancelled and not t.fired]

    def elapse(self) -> None:
        """Fire every timer that is still pending."""
        for timer in self.active:
            timer.fire()


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Configuration pointing logs and the store at a temp directory."""
    return Config(
        bearer_token="test-token",
        db_url=f"sqlite:///{tmp_path / 'search.db'}",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def mock_tmdb_client():
    """Provide mock TMDB client."""
    return MockTMDBClient()


@pytest.fixture
def mock_store():
    """Provide a fresh mock store for each test."""
    return MockSearchStore()


@pytest.fixture
def timers():
    """Provide a fake timer factory."""
    return FakeTimerFactory()


@pytest.fixture
def controller(mock_tmdb_client, mock_store, config, timers):
    """Search controller wired to mocks and fake timers."""
    ctrl = SearchController(mock_tmdb_client, mock_store, config, timer_factory=timers)
    yield ctrl
    ctrl.close()


@pytest.fixture
def api_client(mock_tmdb_client, mock_store):
    """Provide FastAPI test client with mocked dependencies."""
    from api.main import app
    from api import dependencies

    # Clear any cached config/clients from previous runs
    dependencies.get_config.cache_clear()
    dependencies.get_tmdb_client.cache_clear()
    dependencies.get_store.cache_clear()

    def get_mock_config():
        config = MagicMock()
        config.trending_limit = 5
        return config

    app.dependency_overrides[dependencies.get_tmdb_client] = lambda: mock_tmdb_client
    app.dependency_overrides[dependencies.get_store] = lambda: mock_store
    app.dependency_overrides[dependencies.get_config] = get_mock_config

    with TestClient(app) as client:
        yield client

    # Clean up overrides
    app.dependency_overrides.clear()
