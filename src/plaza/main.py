# src/plaza/main.py
"""Main entry point for the Plaza application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from plaza.api.v1 import (
    auth_router,
    moderation_router,
    posts_router,
    reactions_router,
    users_router,
)
from plaza.core.errors import PlazaError
from plaza.core.logging import configure_logging
from plaza.core.settings import settings
from plaza.db.session import create_tables
from plaza.schemas.common import ErrorResponse

configure_logging(settings.log_level, settings.log_json)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Plaza API",
    description="Social content backend with moderated posts",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
error_responses = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)
}
for router in (auth_router, posts_router, reactions_router, moderation_router, users_router):
    app.include_router(router, prefix="/api/v1", responses=error_responses)


@app.exception_handler(PlazaError)
async def plaza_error_handler(request: Request, exc: PlazaError) -> JSONResponse:
    """Render domain errors as ``{kind, message}`` with their mapped status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render uncategorized failures as a 500 without leaking internals."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"kind": "Internal", "message": "Server Error"})


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Plaza API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("plaza.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
