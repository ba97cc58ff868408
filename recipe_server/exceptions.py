"""
Recipe Server: Custom Exception Hierarchy
============================================

What:  Defines application-specific exceptions for every failure the core can report.
Why:   Each exception maps to exactly one HTTP outcome. The store and the
       serializer raise them without knowing anything about status codes;
       the dispatcher is the only place that turns them into responses.
How:   Each exception class carries a message and optional context dict.
       `message` is safe to return to a client, `context` is logged only.
Who:   Raised by the store, the serializer and the dispatcher's route matcher.
When:  During request processing when a request cannot be completed.

Exception Hierarchy:
    RecipeServerError (base)
    ├── ValidationError      → 400 Bad Request (body could not be decoded)
    ├── RouteNotFoundError   → 404 Not Found (no route for method + path)
    ├── NotFoundError        → 404 Not Found (valid route, unknown recipe id)
    └── StoreError           → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class RecipeServerError(Exception):
    """
    Base exception for all Recipe Server errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecipeServerError):
    """
    Raised when a request body cannot be decoded into a Recipe.

    What:    Malformed JSON, wrong shape, missing name, or a name with no
             characters usable in an id.
    HTTP:    400 Bad Request

    The `errors` list holds one entry per offending field so the client can
    see exactly what to fix:
        {"loc": ["ingredients", 0, "name"], "msg": "Field required", "type": "missing"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class RouteNotFoundError(RecipeServerError):
    """
    Raised when no dispatch rule matches the request method and path.

    HTTP:    404 Not Found

    Also covers ids that fail the id grammar (`/recipes/Invalid_ID!`): such a
    path is not a recipe route at all, so the store is never consulted.
    """

    def __init__(self, method: str, path: str):
        super().__init__(
            message=f"No route matches {method} {path}",
            context={"method": method, "path": path},
        )
        self.method = method
        self.path = path


class NotFoundError(RecipeServerError):
    """
    Raised when a requested resource does not exist.

    What:    The client asked for a recipe id the store does not hold.
    When:    GET, PUT or DELETE on /recipes/{id} for an unknown id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StoreError(RecipeServerError):
    """
    Raised when the recipe store fails for any reason other than a missing id.

    HTTP:    500 Internal Server Error

    Security Note:
        The client only ever sees a generic message. The detail in `message`
        and `context` is written to the server log for the operator.
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
