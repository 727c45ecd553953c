"""
Search controller for Movie Finder.

Drives the search screen:
- Debounces raw search text before it reaches the catalog
- Fetches page 1 for every new query and appends pages on "load more"
- Records the top result of a new query in the search-count store
- Loads the trending list once on start
"""

import threading
from typing import Callable, List, Optional

from .client import TMDBClient
from .config import Config
from .debounce import Debouncer
from .exceptions import CatalogError, StoreError
from .models import Movie, MoviePage, TrendingSearch
from .state import GENERIC_ERROR_MESSAGE, LoadStatus, SearchState
from .store import SearchStore
from .utils import setup_logger


def should_record_search(query: str, page: int, results: List[Movie]) -> bool:
    """Only the first page of a non-empty query with results is recorded."""
    return bool(query) and page == 1 and len(results) > 0


class SearchController:
    """
    Owns the SearchState of one search screen.

    Responsibilities:
    - Debounce: raw input becomes the active query after a quiet period
    - Pagination: replace the list on a new query, append on load more
    - Stale responses: only the response for the active query updates state
    - Side effects: record searches, load trending

    Timer callbacks arrive on another thread, so state changes happen under
    a lock. HTTP and database calls run outside it.
    """

    def __init__(
        self,
        client: TMDBClient,
        store: SearchStore,
        config: Config,
        timer_factory: Callable[..., object] = threading.Timer,
    ):
        self.client = client
        self.store = store
        self.config = config
        self.state = SearchState()
        self.logger = setup_logger("search_controller", config.log_dir)
        self._lock = threading.RLock()
        self._debouncer = Debouncer(config.debounce_seconds, self._on_debounced, timer_factory)

    # ============ LIFECYCLE ============

    def start(self) -> None:
        """Load trending searches and the first page for the current query."""
        self.load_trending()
        self.search(self.state.debounced_term)

    def close(self) -> None:
        """Drop any pending debounced input."""
        self._debouncer.cancel()

    # ============ INPUT ============

    def set_search_term(self, text: str) -> None:
        """Mirror raw input; the active query follows after the debounce delay."""
        with self._lock:
            self.state.search_term = text
        self._debouncer.push(text)

    def flush_search_term(self) -> None:
        """Apply pending input now instead of waiting for the timer."""
        self._debouncer.flush()

    def _on_debounced(self, value: str) -> None:
        with self._lock:
            if value == self.state.debounced_term:
                return
        self.search(value)

    # ============ FETCHING ============

    def search(self, query: str) -> bool:
        """
        Make `query` the active query and fetch its first page.

        The movie list is replaced by page 1. Responses still in flight for
        earlier queries are discarded when they arrive.

        Returns:
            True if the page was applied to the state
        """
        with self._lock:
            self.state.debounced_term = query
            self.state.current_page = 1
            self.state.has_more = True
            self.state.error_message = ""
            self.state.generation += 1
            self.state.transition(LoadStatus.loading_initial)
            generation = self.state.generation

        self.logger.info(f"Searching for '{query}'" if query else "Loading popular movies")
        return self._fetch_movies(query, 1, False, generation)

    def load_more(self) -> bool:
        """
        Fetch the next page of the active query and append it.

        Ignored while a fetch is in flight, after a failed fetch, or when
        there are no more pages.

        Returns:
            True if a page was applied to the state
        """
        with self._lock:
            if not self.state.has_more or not self.state.can_transition(LoadStatus.loading_more):
                self.logger.debug(
                    f"Load more ignored (status={self.state.status.value}, "
                    f"has_more={self.state.has_more})"
                )
                return False
            self.state.error_message = ""
            self.state.transition(LoadStatus.loading_more)
            query = self.state.debounced_term
            page = self.state.current_page + 1
            generation = self.state.generation

        return self._fetch_movies(query, page, True, generation)

    def _fetch_movies(self, query: str, page: int, load_more: bool, generation: int) -> bool:
        try:
            movie_page = self.client.fetch_movies(query, page)
        except CatalogError as e:
            self.logger.error(f"Error fetching movies: {e}")
            self._fail(generation)
            return False
        except Exception as e:
            self.logger.exception(f"Unexpected error fetching movies: {e}")
            self._fail(generation)
            return False

        if not self._apply_page(movie_page, page, load_more, generation):
            return False

        if should_record_search(query, page, movie_page.results):
            self._record_search(query, movie_page.results[0])
        return True

    def _apply_page(
        self,
        movie_page: MoviePage,
        page: int,
        load_more: bool,
        generation: int,
    ) -> bool:
        with self._lock:
            if self._is_stale(generation):
                self.logger.debug(f"Discarding stale response for page {page}")
                return False

            if not movie_page.results:
                # Keep whatever is on screen
                self.state.has_more = False
            else:
                if load_more:
                    self.state.movies = self.state.movies + movie_page.results
                else:
                    self.state.movies = list(movie_page.results)
                self.state.current_page = page
                self.state.has_more = movie_page.has_more

            self.state.transition(LoadStatus.success)
            return True

    def _fail(self, generation: int) -> None:
        with self._lock:
            if self._is_stale(generation):
                return
            self.state.error_message = GENERIC_ERROR_MESSAGE
            self.state.transition(LoadStatus.error)

    def _is_stale(self, generation: int) -> bool:
        return generation != self.state.generation

    # ============ STORE ============

    def _record_search(self, query: str, movie: Movie) -> Optional[TrendingSearch]:
        try:
            return self.store.record_search(query, movie)
        except StoreError as e:
            self.logger.warning(f"Error recording search '{query}': {e}")
            return None

    def load_trending(self) -> List[TrendingSearch]:
        """
        Load the most searched terms for the trending section.

        Failures are logged only; the trending list stays empty.
        """
        try:
            trending = self.store.get_trending(limit=self.config.trending_limit)
        except StoreError as e:
            self.logger.error(f"Error fetching trending movies: {e}")
            return []

        with self._lock:
            self.state.trending = trending
        return trending
