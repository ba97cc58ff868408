"""
Recipe Server: Abstract Recipe Store Interface
=================================================

What:  Abstract base class defining the contract for recipe storage.
Why:   The dispatcher depends only on this capability, never on a concrete
       store, so tests can substitute a double without touching routing code.
How:   Concrete implementations inherit from RecipeStore and implement the
       five CRUD operations plus count().
Who:   Called by RecipeDispatcher and the health route.

Implementations:
    - MemoryRecipeStore: in-process dict guarded by a lock (production)
    - SpyRecipeStore (tests/conftest.py): records calls, can be told to fail
"""

from abc import ABC, abstractmethod
from typing import Dict

from recipe_server.schemas.recipe import Recipe


class RecipeStore(ABC):
    """
    Keyed repository of Recipe values.

    Contract:
        - Every operation is atomic with respect to every other operation
        - A missing id is reported with NotFoundError, anything else with StoreError
        - Values are copied in and out; callers never hold a stored reference
    """

    @abstractmethod
    def add(self, recipe_id: str, recipe: Recipe) -> None:
        """
        Store `recipe` under `recipe_id`.

        An existing record under the same id is overwritten (upsert).
        """
        ...

    @abstractmethod
    def get(self, recipe_id: str) -> Recipe:
        """
        Return the recipe stored under `recipe_id`.

        Raises:
            NotFoundError: no record under `recipe_id`.
        """
        ...

    @abstractmethod
    def list(self) -> Dict[str, Recipe]:
        """
        Return a snapshot of every record as an id → recipe mapping.

        An empty store yields an empty dict. Mutating the returned mapping
        has no effect on the store.
        """
        ...

    @abstractmethod
    def update(self, recipe_id: str, recipe: Recipe) -> None:
        """
        Replace the recipe under an existing `recipe_id`.

        Raises:
            NotFoundError: no record under `recipe_id`. Never creates one.
        """
        ...

    @abstractmethod
    def remove(self, recipe_id: str) -> None:
        """
        Delete the record under `recipe_id`.

        Raises:
            NotFoundError: no record under `recipe_id`.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of records currently stored."""
        ...
