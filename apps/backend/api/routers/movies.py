"""
Movie list endpoints for the public API.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_store, get_tmdb_client
from api.exceptions import CatalogUnavailableError
from api.logging_config import logger
from api.schemas.common import ErrorResponse
from api.schemas.movie import MoviePageResponse
from movie_finder.client import TMDBClient
from movie_finder.controller import should_record_search
from movie_finder.exceptions import CatalogError, StoreError
from movie_finder.store import SearchStore

router = APIRouter()

# TMDB serves at most 500 pages for any query
MAX_PAGE = 500


@router.get(
    "/movies",
    response_model=MoviePageResponse,
    responses={502: {"model": ErrorResponse, "description": "Catalog unavailable"}},
)
def list_movies(
    query: str = Query("", max_length=200, description="Search text; empty for popular movies"),
    page: int = Query(1, ge=1, le=MAX_PAGE, description="Page number"),
    client: TMDBClient = Depends(get_tmdb_client),
    store: SearchStore = Depends(get_store),
):
    """
    Search movies by title, or list popular movies when the query is empty.

    The first page of a search with results counts towards trending.
    """
    try:
        movie_page = client.fetch_movies(query, page)
    except CatalogError as e:
        logger.error(f"Error fetching movies: {e}")
        raise CatalogUnavailableError() from e

    if should_record_search(query, page, movie_page.results):
        try:
            store.record_search(query, movie_page.results[0])
        except StoreError as e:
            logger.warning(f"Error recording search '{query}': {e}")

    return {
        "query": query,
        "page": movie_page.page,
        "total_pages": movie_page.total_pages,
        "total_results": movie_page.total_results,
        "has_more": movie_page.has_more,
        "data": [m.to_dict() for m in movie_page.results],
    }
