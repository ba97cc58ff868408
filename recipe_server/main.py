"""
Recipe Server: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes store creation, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn recipe_server.main:app), by the
       `recipe-server` console script, and by tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │ GET /    │ │ /health  │ │ /recipes → dispatch │  │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  State:  app.state.store, app.state.dispatcher      │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from recipe_server import __version__
from recipe_server.config import settings
from recipe_server.middleware.logging import RequestLoggingMiddleware
from recipe_server.middleware.request_id import RequestIDMiddleware, request_id_var
from recipe_server.routes import health, recipes
from recipe_server.services.dispatcher import (
    INTERNAL_ERROR_MESSAGE,
    RecipeDispatcher,
    error_payload,
)
from recipe_server.services.memory_store import MemoryRecipeStore
from recipe_server.services.store_base import RecipeStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Recipe Server %s starting up...", __version__)
    logger.info("Store: %s", type(app.state.store).__name__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    # In-memory recipes are dropped with the process
    logger.info("Recipe Server shutting down (%d recipes discarded)", app.state.store.count())


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the catch-all for errors raised outside the dispatcher.

    The dispatcher turns every recipe error into a response itself, so only
    a genuinely unexpected failure (a dependency, the health route) lands
    here. The body has the same shape as the dispatcher's 500.

    Security: Stack trace is logged server-side ONLY (never in response).
    """

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        payload = error_payload("internal_server_error", INTERNAL_ERROR_MESSAGE, rid)
        return JSONResponse(status_code=500, content=payload.model_dump())


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[RecipeStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Recipe store to serve. Defaults to a new, empty
               MemoryRecipeStore owned by this app instance.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Recipe Server API",
        description="Create, list, fetch, update and delete recipes held in memory.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Store & Dispatcher ────────────────────────────────────────────────
    app.state.store = store if store is not None else MemoryRecipeStore()
    app.state.dispatcher = RecipeDispatcher(app.state.store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(recipes.router)

    return app


def main() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    uvicorn.run(
        "recipe_server.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `recipe_server.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    main()
