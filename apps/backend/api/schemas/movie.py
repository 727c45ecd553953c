"""
Movie-related Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MovieListItem(BaseModel):
    """Movie as shown in result lists."""

    id: int
    title: str
    poster_path: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    release_date: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None


class MoviePageResponse(BaseModel):
    """One page of search or discover results."""

    query: str = Field("", description="Search text; empty for popular movies")
    page: int = Field(..., ge=1, description="Page returned by the catalog")
    total_pages: int = Field(..., ge=0, description="Total pages for the query")
    total_results: int = Field(0, ge=0, description="Total results for the query")
    has_more: bool = Field(..., description="Whether a later page exists")
    data: List[MovieListItem]
