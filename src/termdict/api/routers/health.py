"""Liveness probe.

GET /api/health
"""

from __future__ import annotations

from fastapi import APIRouter

from termdict.api.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Always ``{"ok": true}`` while the process is serving."""
    return HealthResponse(ok=True)
