"""
Exceptions raised by the Movie Finder core package.
"""

from typing import Optional


class MovieFinderError(Exception):
    """Base error for Movie Finder."""


class CatalogError(MovieFinderError):
    """The movie catalog request failed (network, HTTP status or body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class StoreError(MovieFinderError):
    """The search-count store could not be read or written."""


class InvalidTransitionError(MovieFinderError):
    """A load status change that the search state does not allow."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move from {current} to {target}")
