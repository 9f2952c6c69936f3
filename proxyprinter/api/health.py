"""
Health check endpoint.

Liveness only: the service holds no state and has no database to check.
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Returns healthy if the service is running."""
    return HealthResponse(status="healthy")
