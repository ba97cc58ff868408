"""
Recipe Server: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own store, dispatcher and app, so no state leaks
       between tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_store: fresh, empty MemoryRecipeStore
    ├── spy_store: SpyRecipeStore recording every call (can be told to fail)
    ├── dispatcher: RecipeDispatcher over spy_store
    ├── tomato_soup_body: canonical POST body from the API examples
    └── test_client: HTTPX AsyncClient talking to create_app(store=spy_store)
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"

import json
from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from recipe_server.schemas.recipe import Recipe
from recipe_server.services.dispatcher import RecipeDispatcher
from recipe_server.services.memory_store import MemoryRecipeStore
from recipe_server.services.store_base import RecipeStore


# ══════════════════════════════════════════════════════════════════════════
# Test Double
# ══════════════════════════════════════════════════════════════════════════

class SpyRecipeStore(RecipeStore):
    """
    RecipeStore test double.

    Delegates to a real MemoryRecipeStore and records each call as
    (operation, recipe_id) in `calls`. Setting `fail_with` makes every
    operation raise that exception instead, after recording the call.
    """

    def __init__(self) -> None:
        self.backing = MemoryRecipeStore()
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.fail_with: Optional[Exception] = None

    def _record(self, operation: str, recipe_id: Optional[str] = None) -> None:
        self.calls.append((operation, recipe_id))
        if self.fail_with is not None:
            raise self.fail_with

    def add(self, recipe_id: str, recipe: Recipe) -> None:
        self._record("add", recipe_id)
        self.backing.add(recipe_id, recipe)

    def get(self, recipe_id: str) -> Recipe:
        self._record("get", recipe_id)
        return self.backing.get(recipe_id)

    def list(self) -> Dict[str, Recipe]:
        self._record("list")
        return self.backing.list()

    def update(self, recipe_id: str, recipe: Recipe) -> None:
        self._record("update", recipe_id)
        self.backing.update(recipe_id, recipe)

    def remove(self, recipe_id: str) -> None:
        self._record("remove", recipe_id)
        self.backing.remove(recipe_id)

    def count(self) -> int:
        return self.backing.count()


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return MemoryRecipeStore()


@pytest.fixture
def spy_store():
    return SpyRecipeStore()


@pytest.fixture
def dispatcher(spy_store):
    return RecipeDispatcher(spy_store)


@pytest.fixture
def tomato_soup_body():
    """Raw JSON body for creating "Tomato Soup"."""
    return json.dumps(
        {"name": "Tomato Soup", "ingredients": [{"name": "tomato"}]}
    ).encode("utf-8")


@pytest_asyncio.fixture
async def test_client(spy_store):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient routed straight into a fresh app instance.
    How:     ASGITransport, so no server or socket is needed.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from recipe_server.main import create_app
    app = create_app(store=spy_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
