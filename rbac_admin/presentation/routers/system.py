"""System router for non-versioned endpoints (health)."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

system_router = APIRouter(tags=["System"])


@system_router.get("/health")
async def health(request: Request) -> JSONResponse:
    """Health check for monitoring and load balancers.

    Reports 503 when the database is unreachable.
    """
    database = request.app.state.database
    if not await database.check_connection():
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return JSONResponse(content={"status": "healthy"})
