"""
Movie Finder REST API.

This module provides a FastAPI-based REST API for the search screen:
catalog pages (search and popular) and the trending searches list.
"""

from api.main import app

__all__ = ["app"]
