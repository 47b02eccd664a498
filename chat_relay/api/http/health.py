"""Health check endpoint for monitoring service status."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from chat_relay.managers.connection_registry import connection_registry

router = APIRouter()


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    connections: int


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    tags=["health"],
)
async def health_check() -> HealthResponse:
    """
    Report service status and the number of connected chat clients.

    The relay has no external dependencies, so a running process is a
    healthy one.

    Returns:
        HealthResponse: Status and current connection count.
    """
    return HealthResponse(
        status="healthy", connections=await connection_registry.count()
    )
