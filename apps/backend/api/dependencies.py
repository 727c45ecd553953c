"""
Dependency injection for the API.

Provides cached configuration, catalog client and search-count store.
"""

from functools import lru_cache

from api.logging_config import logger
from movie_finder.client import TMDBClient
from movie_finder.config import Config
from movie_finder.exceptions import StoreError
from movie_finder.store import SearchStore


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()


@lru_cache()
def get_tmdb_client() -> TMDBClient:
    """Get cached TMDBClient instance."""
    return TMDBClient(get_config())


@lru_cache()
def get_store() -> SearchStore:
    """
    Get cached SearchStore instance.

    Table creation is attempted once. An unreachable store is still returned:
    the routes handle its StoreErrors, so catalog search keeps working.
    """
    store = SearchStore(get_config())
    try:
        store.create_tables()
    except StoreError as e:
        logger.warning(f"Search store unavailable, tables not created: {e}")
    return store
