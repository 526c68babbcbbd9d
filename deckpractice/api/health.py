"""
Health check endpoints.

Provides a liveness probe and a readiness probe reporting how many
practice tables are held in memory.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deckpractice.services.table_registry import TableRegistry, get_registry

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    tables: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    """
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=HealthResponse)
async def ready(
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> HealthResponse:
    """
    Readiness probe.

    Tables live in memory, so there is no dependency to check; reports the
    number of open tables.
    """
    return HealthResponse(status="ready", tables=len(registry))
