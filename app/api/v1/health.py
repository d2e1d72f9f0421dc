"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(request: Request) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; a database outage reports "warning", not an error.
    """
    connected = request.app.state.database.is_connected()
    return HealthResponse(
        status="ok" if connected else "warning",
        environment=request.app.state.settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )
