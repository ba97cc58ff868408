"""
Recipe Server: FastAPI Dependencies
======================================

What:  Resolve the store and dispatcher belonging to the running application.
Why:   Both are created by create_app() and kept on `app.state`, never as
       module globals, so every app instance (and every test) has its own.
How:   Route handlers declare `Depends(get_dispatcher)` / `Depends(get_store)`.
"""

from fastapi import Request

from recipe_server.services.dispatcher import RecipeDispatcher
from recipe_server.services.store_base import RecipeStore


def get_store(request: Request) -> RecipeStore:
    return request.app.state.store


def get_dispatcher(request: Request) -> RecipeDispatcher:
    return request.app.state.dispatcher
