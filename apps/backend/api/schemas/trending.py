"""
Trending-related Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel


class TrendingItem(BaseModel):
    """A recorded search with its count and top result."""

    id: int
    search_term: str
    count: int
    movie_id: Optional[int] = None
    title: Optional[str] = None
    poster_url: Optional[str] = None


class TrendingResponse(BaseModel):
    """Response for the trending searches endpoint."""

    data: List[TrendingItem]
