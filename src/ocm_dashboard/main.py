"""OCM Dashboard FastAPI Application.

The dashboard backend provides:
- Read-only views of managed clusters, cluster sets, bindings, placements,
  placement decisions, addons and manifest works
- A Server-Sent Events stream of managed cluster snapshots
- Bearer token authentication through Kubernetes TokenReview
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ocm_shared.config import Settings, get_settings
from ocm_shared.observability import get_logger, setup_logging

from . import __version__
from .api import (
    clusters,
    clustersetbindings,
    clustersets,
    health,
    manifestworks,
    placementdecisions,
    placements,
    streaming,
)
from .clients import OCMClientError, create_ocm_client
from .middleware import RequestContextMiddleware, require_stream_user, require_user

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the shared OCM client once. If no Kubernetes configuration is
    usable the service still starts; resource routes answer 500 and the
    stream answers with an error frame until it is restarted with one.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting OCM dashboard",
        version=settings.app_version,
        mock=settings.dashboard.use_mock,
        bypass_auth=settings.dashboard.bypass_auth,
    )

    app.state.shutdown_event = asyncio.Event()
    try:
        app.state.ocm_client = await create_ocm_client(settings)
    except OCMClientError as e:
        logger.error("Kubernetes client not initialized", error=str(e))
        app.state.ocm_client = None

    yield

    logger.info("Shutting down OCM dashboard")
    app.state.shutdown_event.set()
    if app.state.ocm_client is not None:
        await app.state.ocm_client.close()
    logger.info("OCM dashboard shutdown complete")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to run with (defaults to get_settings())
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="OCM Dashboard",
        description="Read-only dashboard API for Open Cluster Management hubs",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ocm_client = None
    app.state.shutdown_event = asyncio.Event()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.dashboard.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    api_dependencies = [Depends(require_user)]
    app.include_router(clusters.router, prefix="/api", tags=["Clusters"], dependencies=api_dependencies)
    app.include_router(clustersets.router, prefix="/api", tags=["Cluster Sets"], dependencies=api_dependencies)
    app.include_router(
        clustersetbindings.router,
        prefix="/api",
        tags=["Cluster Set Bindings"],
        dependencies=api_dependencies,
    )
    app.include_router(placements.router, prefix="/api", tags=["Placements"], dependencies=api_dependencies)
    app.include_router(
        placementdecisions.router,
        prefix="/api",
        tags=["Placement Decisions"],
        dependencies=api_dependencies,
    )
    app.include_router(manifestworks.router, prefix="/api", tags=["Manifest Works"], dependencies=api_dependencies)
    app.include_router(
        streaming.router,
        prefix="/api",
        tags=["Streaming"],
        dependencies=[Depends(require_stream_user)],
    )
    app.include_router(health.router, tags=["Health"])

    @app.get("/")
    async def root():
        """Root endpoint with service info."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ocm_dashboard.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
    )


setup_logging(service_name=__name__)
app = create_app()
