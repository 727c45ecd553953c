"""
Data models for Movie Finder.

Provides dataclasses for catalog pages and recorded searches.
"""

from dataclasses import dataclass, field
from typing import List, Optional

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"


@dataclass
class Movie:
    """Movie as returned by the catalog search and discover endpoints."""

    id: int
    title: str
    poster_path: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    release_date: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None

    def get_poster_url(self, image_base_url: str = POSTER_BASE_URL) -> Optional[str]:
        """Full poster URL, or None when the movie has no poster."""
        if not self.poster_path:
            return None
        return f"{image_base_url}{self.poster_path}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "title": self.title,
            "poster_path": self.poster_path,
            "popularity": self.popularity,
            "vote_average": self.vote_average,
            "vote_count": self.vote_count,
            "release_date": self.release_date,
            "original_language": self.original_language,
            "overview": self.overview,
        }

    def display_line(self, index: int) -> str:
        """Return single-line display for result lists."""
        year = self.release_date[:4] if self.release_date else "N/A"
        rating = f"{self.vote_average:.1f}" if self.vote_average else "N/A"
        return f"  [{index}] {self.title} ({year}) - rating {rating}"

    @classmethod
    def from_tmdb(cls, data: dict) -> "Movie":
        """Create from a TMDB search/discover result."""
        return cls(
            id=data.get("id"),
            title=data.get("title", "Unknown"),
            poster_path=data.get("poster_path"),
            popularity=data.get("popularity"),
            vote_average=data.get("vote_average"),
            vote_count=data.get("vote_count"),
            release_date=data.get("release_date") or None,
            original_language=data.get("original_language"),
            overview=data.get("overview"),
        )


@dataclass
class MoviePage:
    """One page of catalog results."""

    results: List[Movie] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total_results: int = 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages

    @classmethod
    def from_tmdb(cls, data: dict) -> "MoviePage":
        """
        Create from a TMDB paginated response.

        Raises:
            ValueError: If the body has no results list.
        """
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise ValueError("Response body has no results list")

        return cls(
            results=[Movie.from_tmdb(m) for m in data["results"]],
            page=int(data.get("page", 1)),
            total_pages=int(data.get("total_pages", 0)),
            total_results=int(data.get("total_results", 0)),
        )


@dataclass
class TrendingSearch:
    """A recorded search term with its hit count and top result."""

    id: int
    search_term: str
    count: int
    movie_id: Optional[int] = None
    title: Optional[str] = None
    poster_url: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "search_term": self.search_term,
            "count": self.count,
            "movie_id": self.movie_id,
            "title": self.title,
            "poster_url": self.poster_url,
        }
