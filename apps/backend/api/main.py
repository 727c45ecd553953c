"""
FastAPI application for the Movie Finder API.

Public API for the search screen: catalog pages and trending searches.
The search-count table is created on first use or via the CLI setup command.
"""

import os
import time
from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.exceptions import APIError, api_error_handler, generic_exception_handler
from api.logging_config import (
    logger,
    generate_request_id,
    set_request_id,
)

from api.routers import movies, trending
from api.schemas.common import HealthResponse

app = FastAPI(
    title="Movie Finder API",
    description="Search TMDB movies and see trending searches",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)


def parse_origins(value: str) -> List[str]:
    """Split a comma-separated ALLOWED_ORIGINS value."""
    return [o.strip() for o in value.split(",") if o.strip()]


# Middleware must be added before the app starts, so origins come straight from the env
_origins = parse_origins(os.getenv("ALLOWED_ORIGINS", ""))
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins or ["*"],
    allow_credentials=bool(_origins),
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with timing and response status."""
    request_id = generate_request_id()
    set_request_id(request_id)

    # Skip logging for health checks and docs
    skip_paths = {"/health", "/", "/api/docs", "/api/redoc", "/api/openapi.json"}
    if request.url.path in skip_paths:
        return await call_next(request)

    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"

    logger.info(
        f"Request started: {request.method} {request.url.path} "
        f"from {client_ip}"
    )

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"duration={duration_ms:.2f}ms error={str(e)}"
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    log_msg = (
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration_ms:.2f}ms"
    )

    if response.status_code >= 500:
        logger.error(log_msg)
    elif response.status_code >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    # Add request ID to response headers for debugging
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(movies.router, prefix="/api/v1", tags=["Movies"])
app.include_router(trending.router, prefix="/api/v1", tags=["Trending"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint points to docs."""
    return {
        "message": "Movie Finder API",
        "docs": "/api/docs",
        "redoc": "/api/redoc",
    }


@app.get("/health", response_model=HealthResponse, include_in_schema=False)
async def health():
    """Simple health check endpoint."""
    return {"status": "ok"}
