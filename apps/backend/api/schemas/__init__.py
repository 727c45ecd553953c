"""Pydantic schemas for API request and response validation."""

from api.schemas.common import ErrorResponse, HealthResponse
from api.schemas.movie import MovieListItem, MoviePageResponse
from api.schemas.trending import TrendingItem, TrendingResponse

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Movie
    "MovieListItem",
    "MoviePageResponse",
    # Trending
    "TrendingItem",
    "TrendingResponse",
]
