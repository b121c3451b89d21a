import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from gitly.config import configuration
from gitly.data_models.api_response import ApiResponse, success

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)

# =============================================================================
#   Router
# =============================================================================
router = APIRouter(prefix="/api", tags=["health"])


# =============================================================================
#   Health check
# =============================================================================
@router.get(
    "/health",
    summary="Health check.",
    description="Returns the service status, name and version wrapped in the standard envelope.",
    response_model=ApiResponse[Dict[str, Any]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def health_check() -> JSONResponse:
    """Liveness check."""
    logger.debug("GET /api/health")

    health_data = {
        "status": "UP",
        "service": configuration.app.name,
        "version": configuration.app.version,
    }
    response = success(health_data, message="Application is healthy and running")
    return JSONResponse(status_code=status.HTTP_200_OK, content=response.to_wire())
