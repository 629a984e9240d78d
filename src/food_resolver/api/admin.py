"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from food_resolver.api.models import (
    CleanupRequest,
    cache_stats_payload,
    cleanup_payload,
)

if TYPE_CHECKING:
    from food_resolver.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/cache", dependencies=[Depends(require_admin)])
async def cache_stats(request: Request) -> dict[str, object]:
    """Return analysis cache counters."""
    container: AppContainer = request.app.state.container
    return cache_stats_payload(container.analysis_cache.stats())


@router.delete("/cache", dependencies=[Depends(require_admin)])
async def clear_cache(request: Request) -> dict[str, str]:
    """Drop every cached image analysis."""
    container: AppContainer = request.app.state.container
    container.analysis_cache.clear()
    return {"status": "cleared"}


@router.post("/corpus/cleanup", dependencies=[Depends(require_admin)])
async def cleanup_corpus(
    request: Request, body: CleanupRequest | None = None
) -> dict[str, object]:
    """Remove duplicate (and optionally low-accuracy) corpus foods."""
    container: AppContainer = request.app.state.container
    remove_inaccurate = body.remove_inaccurate if body else False
    report = await asyncio.to_thread(
        container.maintenance_service.cleanup_duplicates, remove_inaccurate
    )
    return cleanup_payload(report)
