"""
Recipe Server: API Routes Package
====================================

Route Inventory:
    - health.py:   GET /                  (home page text)
                   GET /health            (service health check)
    - recipes.py:  /recipes, /recipes/*   (forwarded to RecipeDispatcher)

Design Principle:
    Routes are THIN. They read the request, hand it to a service, and write
    the response. Matching recipe paths and choosing status codes is the
    dispatcher's job.
"""
