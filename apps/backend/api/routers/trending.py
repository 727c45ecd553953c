"""
Trending searches endpoint for the public API.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_store
from api.logging_config import logger
from api.schemas.trending import TrendingResponse
from movie_finder.exceptions import StoreError
from movie_finder.store import SearchStore

router = APIRouter()


@router.get("/trending", response_model=TrendingResponse)
def get_trending(
    limit: int = Query(5, ge=1, le=20, description="Number of results"),
    store: SearchStore = Depends(get_store),
):
    """
    Get the most searched terms with their top result.

    Store failures are logged and answered with an empty list.
    """
    try:
        trending = store.get_trending(limit=limit)
    except StoreError as e:
        logger.error(f"Error fetching trending movies: {e}")
        trending = []

    return {"data": [t.to_dict() for t in trending]}
