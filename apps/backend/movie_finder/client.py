"""
TMDB API client for Movie Finder.

Handles the catalog requests behind the search screen:
- Title search (/search/movie) for non-empty queries
- Popularity discovery (/discover/movie) when the query is empty
- Response parsing into data models
"""

from typing import Tuple

import requests

from .config import Config
from .exceptions import CatalogError
from .models import MoviePage
from .utils import setup_logger


class TMDBClient:
    """
    Handles all TMDB API interactions.

    Responsibilities:
    - Endpoint selection (search vs. discover)
    - Bearer authentication via session headers
    - Failure detection (network, non-2xx, malformed body)

    Failed requests are not retried; callers decide what to show.
    """

    SEARCH_ENDPOINT = "/search/movie"
    DISCOVER_ENDPOINT = "/discover/movie"

    def __init__(self, config: Config):
        self.config = config
        self.session = self._create_session()
        self.logger = setup_logger("tmdb_client", config.log_dir)

    def _create_session(self) -> requests.Session:
        """Create requests session with default headers."""
        session = requests.Session()
        session.headers.update(self.config.get_headers())
        return session

    def build_request(self, query: str = "", page: int = 1) -> Tuple[str, dict]:
        """
        Pick the endpoint and query parameters for a page of results.

        Args:
            query: Search text; empty means "discover popular movies"
            page: Page number (1-indexed)

        Returns:
            Tuple of (endpoint path, query parameters)
        """
        if query:
            return self.SEARCH_ENDPOINT, {"query": query, "page": page}
        return self.DISCOVER_ENDPOINT, {"sort_by": "popularity.desc", "page": page}

    def fetch_movies(self, query: str = "", page: int = 1) -> MoviePage:
        """
        Fetch one page of movies.

        Args:
            query: Search term (title); empty for popular movies
            page: Page number (1-indexed)

        Returns:
            MoviePage with results, page and total_pages

        Raises:
            CatalogError: On network failure, non-2xx status or malformed body
        """
        endpoint, params = self.build_request(query, page)
        url = f"{self.config.base_url}{endpoint}"

        try:
            response = self.session.get(url, params=params, timeout=self.config.request_timeout)
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"Request to {endpoint} failed: {e}") from e

        if not response.ok:
            self.logger.warning(f"Catalog returned {response.status_code} for {endpoint}")
            raise CatalogError("Failed to fetch movies", status_code=response.status_code)

        try:
            return MoviePage.from_tmdb(response.json())
        except (ValueError, TypeError, AttributeError, KeyError) as e:
            raise CatalogError(f"Malformed response from {endpoint}: {e}") from e

    def test_connection(self) -> bool:
        """Test API connection by fetching the first discover page."""
        try:
            self.fetch_movies("", 1)
            return True
        except CatalogError as e:
            self.logger.error(f"API connection test failed: {e}")
            return False
