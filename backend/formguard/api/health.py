"""Health check endpoint."""

import time
from fastapi import APIRouter

from formguard import __version__
from formguard.models.responses import HealthResponse
from formguard.validators import get_registry

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Service health with the number of registered validators."""
    validators = len(get_registry())
    return HealthResponse(
        status="healthy" if validators else "unhealthy",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        validators=validators,
    )
