"""
Recipe Server: In-Memory Recipe Store
========================================

What:  The production RecipeStore: a dict of id → Recipe held in process memory.
Why:   Recipes only need to live as long as the server process.
How:   One threading.Lock guards the dict. Every public method takes the lock
       for its whole body, so a reader never observes a half-applied write
       and two writers never interleave.
Who:   Created by the application factory and injected into the dispatcher.

Thread Safety:
    The HTTP layer runs each dispatch in Starlette's thread pool, so several
    requests can call into the same store at the same moment. There is no
    atomicity across calls: a create is "slugify then add", and two creates
    for the same name simply race, last writer wins.

Copy semantics:
    Recipes are deep-copied on the way in and on the way out. A caller that
    mutates a Recipe after add(), or mutates what get()/list() returned,
    cannot change what the store holds.
"""

import logging
import threading
from typing import Dict

from recipe_server.exceptions import NotFoundError
from recipe_server.schemas.recipe import Recipe
from recipe_server.services.store_base import RecipeStore

logger = logging.getLogger(__name__)


class MemoryRecipeStore(RecipeStore):
    """Lock-guarded in-memory implementation of RecipeStore."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._recipes: Dict[str, Recipe] = {}

    def add(self, recipe_id: str, recipe: Recipe) -> None:
        with self._lock:
            replaced = recipe_id in self._recipes
            self._recipes[recipe_id] = recipe.model_copy(deep=True)
        if replaced:
            logger.info("Recipe %s overwritten", recipe_id)
        else:
            logger.info("Recipe %s added", recipe_id)

    def get(self, recipe_id: str) -> Recipe:
        with self._lock:
            recipe = self._recipes.get(recipe_id)
            if recipe is None:
                raise NotFoundError(resource="recipe", resource_id=recipe_id)
            return recipe.model_copy(deep=True)

    def list(self) -> Dict[str, Recipe]:
        with self._lock:
            return {
                recipe_id: recipe.model_copy(deep=True)
                for recipe_id, recipe in self._recipes.items()
            }

    def update(self, recipe_id: str, recipe: Recipe) -> None:
        with self._lock:
            if recipe_id not in self._recipes:
                raise NotFoundError(resource="recipe", resource_id=recipe_id)
            self._recipes[recipe_id] = recipe.model_copy(deep=True)
        logger.info("Recipe %s updated", recipe_id)

    def remove(self, recipe_id: str) -> None:
        with self._lock:
            if recipe_id not in self._recipes:
                raise NotFoundError(resource="recipe", resource_id=recipe_id)
            del self._recipes[recipe_id]
        logger.info("Recipe %s removed", recipe_id)

    def count(self) -> int:
        with self._lock:
            return len(self._recipes)
