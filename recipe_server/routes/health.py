"""
Recipe Server: Health Check and Home Routes
==============================================

What:  GET / (plain-text home page) and GET /health (monitoring probe).
Why:   Load balancers and container orchestrators need a cheap way to ask
       "is this process serving?". The home page is the classic liveness text.
How:   /health reads the store's record count, which also proves the store
       lock is not wedged.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from recipe_server import __version__
from recipe_server.config import settings
from recipe_server.dependencies import get_store
from recipe_server.schemas.recipe import HealthResponse
from recipe_server.services.store_base import RecipeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Home page")
async def home() -> str:
    return settings.home_message


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the service and the number of stored recipes. "
        "Used by container health checks and load balancers."
    ),
)
def health_check(store: RecipeStore = Depends(get_store)) -> HealthResponse:
    """
    Check the health of the service.

    Declared as a plain `def` so FastAPI runs it in the thread pool: count()
    takes the store lock and must not block the event loop.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        recipes=store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
