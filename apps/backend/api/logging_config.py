"""
Request-aware logging for the API.

The API logger is a regular Movie Finder logger (see movie_finder.utils)
whose records carry the id of the request being served.
"""

import logging
import os
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Optional

from movie_finder.utils import setup_logger

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

API_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"


class RequestIdFilter(logging.Filter):
    """Add request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def setup_api_logger(name: str = "movie_finder_api") -> logging.Logger:
    """Set up the API logger in LOG_DIR with request ids in every line."""
    logger = setup_logger(name, Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs"))))

    formatter = logging.Formatter(API_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in logger.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())

    return logger


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:8]


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


logger = setup_api_logger()
