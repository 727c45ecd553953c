"""
Movie Finder - Movie search and discovery backed by TMDB.

This package provides tools for:
- Searching the TMDB catalog with debounced input and "load more" pagination
- Discovering popular movies when no query is given
- Counting searches and listing the trending ones
"""

from .config import Config
from .models import Movie, MoviePage, TrendingSearch
from .client import TMDBClient
from .store import SearchStore
from .debounce import Debouncer
from .state import GENERIC_ERROR_MESSAGE, LoadStatus, SearchState
from .controller import SearchController, should_record_search
from .exceptions import CatalogError, InvalidTransitionError, MovieFinderError, StoreError

__version__ = "1.0.0"
__all__ = [
    "Config",
    "Movie",
    "MoviePage",
    "TrendingSearch",
    "TMDBClient",
    "SearchStore",
    "Debouncer",
    "GENERIC_ERROR_MESSAGE",
    "LoadStatus",
    "SearchState",
    "SearchController",
    "should_record_search",
    "CatalogError",
    "InvalidTransitionError",
    "MovieFinderError",
    "StoreError",
]
