"""
Search screen state.

Loading and error flags are modeled as a single LoadStatus with explicit
transitions, so the screen can never be loading the first page and the
next page at the same time.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List

from .exceptions import InvalidTransitionError
from .models import Movie, TrendingSearch

GENERIC_ERROR_MESSAGE = "Error fetching movies. Please try again later."


class LoadStatus(str, Enum):
    """Where the movie list is in its fetch cycle."""

    idle = "idle"
    loading_initial = "loading_initial"
    loading_more = "loading_more"
    error = "error"
    success = "success"


# A new query may supersede anything, including an in-flight fetch.
ALLOWED_TRANSITIONS: Dict[LoadStatus, FrozenSet[LoadStatus]] = {
    LoadStatus.idle: frozenset({LoadStatus.loading_initial}),
    LoadStatus.success: frozenset({LoadStatus.loading_initial, LoadStatus.loading_more}),
    LoadStatus.error: frozenset({LoadStatus.loading_initial}),
    LoadStatus.loading_initial: frozenset(
        {LoadStatus.loading_initial, LoadStatus.success, LoadStatus.error}
    ),
    LoadStatus.loading_more: frozenset(
        {LoadStatus.loading_initial, LoadStatus.success, LoadStatus.error}
    ),
}


@dataclass
class SearchState:
    """Transient, process-local state of one search screen."""

    search_term: str = ""
    debounced_term: str = ""
    movies: List[Movie] = field(default_factory=list)
    current_page: int = 1
    has_more: bool = True
    status: LoadStatus = LoadStatus.idle
    error_message: str = ""
    trending: List[TrendingSearch] = field(default_factory=list)
    # Bumped for every new query; responses carrying an older value are stale
    generation: int = 0

    @property
    def is_loading_initial(self) -> bool:
        return self.status == LoadStatus.loading_initial

    @property
    def is_loading_more(self) -> bool:
        return self.status == LoadStatus.loading_more

    @property
    def is_loading(self) -> bool:
        return self.is_loading_initial or self.is_loading_more

    def can_transition(self, target: LoadStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition(self, target: LoadStatus) -> None:
        """
        Move to a new load status.

        Raises:
            InvalidTransitionError: If the move is not allowed from the current status
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self.status.value, target.value)
        self.status = target

    def snapshot(self) -> dict:
        """Plain-dict view for display and JSON output."""
        return {
            "search_term": self.search_term,
            "debounced_term": self.debounced_term,
            "movies": [m.to_dict() for m in self.movies],
            "current_page": self.current_page,
            "has_more": self.has_more,
            "status": self.status.value,
            "is_loading_initial": self.is_loading_initial,
            "is_loading_more": self.is_loading_more,
            "error_message": self.error_message,
            "trending": [t.to_dict() for t in self.trending],
        }
