"""
Recipe Server: Services Layer
================================

Service Inventory:
    - RecipeStore (abstract): CRUD capability the dispatcher depends on
    - MemoryRecipeStore: lock-guarded in-memory implementation
    - RecipeDispatcher: (method, path, body) → store call → (status, body)
    - slug: recipe id derivation and id grammar
"""
