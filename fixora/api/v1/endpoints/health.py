"""
Public health check.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from fixora.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Database connectivity."""
    return HealthResponse(db=await request.app.state.db.ping())
