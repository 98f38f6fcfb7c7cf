"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from commlog_api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        message="API is running",
    )
