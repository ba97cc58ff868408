"""
Recipe Server: Application Package Initializer
=================================================

What: An HTTP resource server for recipes backed by an in-memory store.

Architecture Note:

    ┌─────────────────────────────────────┐
    │       Routes (FastAPI binding)      │  ← move bytes in and out
    ├─────────────────────────────────────┤
    │        Dispatcher (services)        │  ← rule table, error → status
    ├─────────────────────────────────────┤
    │   Schemas (pydantic) + slug ids     │  ← wire format, id grammar
    ├─────────────────────────────────────┤
    │     RecipeStore (in-memory dict)    │  ← the only shared state
    └─────────────────────────────────────┘

    The dispatcher depends on the RecipeStore capability only, so each layer
    can be tested without the ones above it.
"""

__version__ = "1.0.0"
