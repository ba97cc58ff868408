"""
Recipe Server: Recipe Route Handlers
=======================================

What:  Binds the /recipes subtree of the HTTP API to the RecipeDispatcher.
Why:   The dispatcher owns matching, id extraction and status mapping.
       These handlers only move bytes between Starlette and the dispatcher.
How:   Two catch-all routes forward method, path and raw body. The dispatch
       itself runs in the thread pool so concurrent requests really do hit
       the store in parallel.
Who:   Called by any HTTP client.

Route Inventory (resolved by the dispatcher, not by FastAPI):
    GET     /recipes        list all recipes
    POST    /recipes        create a recipe (201)
    GET     /recipes/{id}   fetch one recipe
    PUT     /recipes/{id}   replace one recipe
    DELETE  /recipes/{id}   delete one recipe
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from recipe_server.dependencies import get_dispatcher
from recipe_server.middleware.request_id import request_id_var
from recipe_server.schemas.recipe import CreatedResponse, ErrorResponse, Recipe
from recipe_server.services.dispatcher import RecipeDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Recipes"])

# Methods forwarded to the dispatcher. PATCH has no rule and comes back as
# route_not_found; anything else is rejected by Starlette with 405.
FORWARDED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


async def _forward(request: Request, dispatcher: RecipeDispatcher) -> Response:
    body = await request.body()
    rid = getattr(request.state, "request_id", "") or request_id_var.get("")
    result = await run_in_threadpool(
        dispatcher.dispatch,
        request.method,
        request.url.path,
        body,
        rid,
    )
    # Read back by RequestLoggingMiddleware
    request.state.route_action = result.action
    request.state.recipe_id = result.recipe_id
    request.state.outcome = result.error
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.media_type,
    )


@router.api_route(
    "/recipes",
    methods=FORWARDED_METHODS,
    responses={
        200: {"description": "All recipes keyed by id"},
        201: {"description": "Recipe created", "model": CreatedResponse},
        400: {"description": "Body is not a valid recipe", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List or create recipes",
)
async def recipes_collection(
    request: Request,
    dispatcher: RecipeDispatcher = Depends(get_dispatcher),
) -> Response:
    """
    GET lists every recipe as a JSON object keyed by id.
    POST creates a recipe; its id is the slug of its name.
    """
    return await _forward(request, dispatcher)


@router.api_route(
    "/recipes/{recipe_path:path}",
    methods=FORWARDED_METHODS,
    responses={
        200: {"description": "The recipe", "model": Recipe},
        400: {"description": "Body is not a valid recipe", "model": ErrorResponse},
        404: {"description": "Recipe or route not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Fetch, replace or delete one recipe",
)
async def recipe_item(
    recipe_path: str,
    request: Request,
    dispatcher: RecipeDispatcher = Depends(get_dispatcher),
) -> Response:
    return await _forward(request, dispatcher)
