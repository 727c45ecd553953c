"""
Configuration management for Movie Finder.

Loads configuration from environment variables and provides
a centralized Config dataclass for all settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Config:
    """Centralized configuration from environment variables."""

    # TMDB API
    bearer_token: str
    base_url: str = "https://api.themoviedb.org/3"
    image_base_url: str = "https://image.tmdb.org/t/p/w500"
    request_timeout: float = 10.0

    # Search-count store
    db_url: str = "sqlite:///movie_finder.db"

    # Search behavior
    debounce_ms: int = 500
    trending_limit: int = 5

    # Paths
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to .env file. If not provided,
                     looks for .env in monorepo root, then current directory.

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If required environment variables are missing or invalid.
        """
        if env_path:
            load_dotenv(env_path)
        else:
            # Monorepo root is ../../../.env from this file
            root_env = Path(__file__).parent.parent.parent.parent / ".env"
            if root_env.exists():
                load_dotenv(root_env)
            else:
                load_dotenv()

        # The frontend build used VITE_TMDB_API_KEY for the same bearer token
        bearer_token = os.getenv("TMDB_BEARER_TOKEN") or os.getenv("VITE_TMDB_API_KEY")
        if not bearer_token:
            raise ValueError("TMDB_BEARER_TOKEN environment variable is required")

        try:
            request_timeout = float(os.getenv("REQUEST_TIMEOUT", "10"))
            debounce_ms = int(os.getenv("DEBOUNCE_MS", "500"))
            trending_limit = int(os.getenv("TRENDING_LIMIT", "5"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

        if debounce_ms < 0:
            raise ValueError("DEBOUNCE_MS must be >= 0")
        if trending_limit < 1:
            raise ValueError("TRENDING_LIMIT must be >= 1")

        return cls(
            bearer_token=bearer_token,
            base_url=os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3").rstrip("/"),
            image_base_url=os.getenv(
                "TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p/w500"
            ).rstrip("/"),
            request_timeout=request_timeout,
            db_url=os.getenv("SEARCH_DB_URL", "sqlite:///movie_finder.db"),
            debounce_ms=debounce_ms,
            trending_limit=trending_limit,
            log_dir=Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs"))),
        )

    def get_headers(self) -> dict:
        """Get headers for TMDB API requests."""
        return {
            "Authorization": f"Bearer {self.bearer_token}",
            "accept": "application/json",
        }
