"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    description="Basic health check endpoint.",
)
async def health(request: Request):
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "service": settings.app_name,
        "kubernetes": request.app.state.ocm_client is not None,
        "mock": settings.dashboard.use_mock,
    }


@router.get("/healthz", summary="Liveness probe")
async def healthz():
    return {"status": "ok"}
