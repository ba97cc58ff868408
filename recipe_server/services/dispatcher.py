"""
Recipe Server: Request Dispatcher
====================================

What:  Maps an inbound (method, path, body) to one RecipeStore call and maps
       the outcome back to (status, JSON body).
Why:   Keeps routing and error translation independent of the web framework.
       FastAPI only forwards the /recipes subtree here; everything about
       which operation runs and which status comes back is decided below.
How:   An ordered rule table over (method, path segments). The first rule
       whose method and segment pattern match wins. Path parameters are
       checked against the id grammar while matching, so a malformed id is
       "no route", never a store lookup.
Who:   Called by the /recipes routes with the raw request.

Dispatch Table:
    GET     /recipes        → list
    POST    /recipes        → create (id = slugify(body.name))
    GET     /recipes/{id}   → get
    PUT     /recipes/{id}   → update
    DELETE  /recipes/{id}   → remove
    anything else           → RouteNotFoundError

Error → Status:
    ValidationError      → 400  validation_error
    RouteNotFoundError   → 404  route_not_found
    NotFoundError        → 404  not_found
    StoreError / other   → 500  internal_server_error (detail logged only)
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple, Union

from recipe_server.exceptions import (
    NotFoundError,
    RouteNotFoundError,
    StoreError,
    ValidationError,
)
from recipe_server.schemas.recipe import (
    CreatedResponse,
    ErrorResponse,
    StatusResponse,
    decode_recipe,
    encode_model,
    encode_recipe,
    encode_recipes,
)
from recipe_server.services.slug import is_valid_id, slugify
from recipe_server.services.store_base import RecipeStore

logger = logging.getLogger(__name__)

COLLECTION = "recipes"

INTERNAL_ERROR_MESSAGE = "internal server error"


@dataclass(frozen=True)
class PathParam:
    """A path segment captured into a named parameter if `accepts` approves it."""
    name: str
    accepts: Callable[[str], bool]


Segment = Union[str, PathParam]

RECIPE_ID = PathParam("recipe_id", is_valid_id)


@dataclass(frozen=True)
class Route:
    method: str
    segments: Tuple[Segment, ...]
    action: str

    def match(self, method: str, parts: Tuple[str, ...]) -> Optional[Dict[str, str]]:
        """Return the captured parameters, or None if this route does not apply."""
        if method != self.method or len(parts) != len(self.segments):
            return None
        params: Dict[str, str] = {}
        for expected, actual in zip(self.segments, parts):
            if isinstance(expected, PathParam):
                if not expected.accepts(actual):
                    return None
                params[expected.name] = actual
            elif expected != actual:
                return None
        return params


ROUTES: Tuple[Route, ...] = (
    Route("GET", (COLLECTION,), "list_recipes"),
    Route("POST", (COLLECTION,), "create_recipe"),
    Route("GET", (COLLECTION, RECIPE_ID), "get_recipe"),
    Route("PUT", (COLLECTION, RECIPE_ID), "update_recipe"),
    Route("DELETE", (COLLECTION, RECIPE_ID), "delete_recipe"),
)


@dataclass(frozen=True)
class DispatchResult:
    """
    Outcome of one dispatch: an HTTP status and an encoded JSON body.

    `action` and `recipe_id` name the matched rule (None when nothing
    matched); `error` is the error code of a failed dispatch. They feed the
    access log and never reach the client.
    """
    status_code: int
    body: bytes
    media_type: str = "application/json"
    action: Optional[str] = None
    recipe_id: Optional[str] = None
    error: Optional[str] = None


def split_path(path: str) -> Tuple[str, ...]:
    """
    Split a URL path into segments.

    Trailing slashes are ignored, so "/recipes/" is the collection root.
    Inner empty segments are kept and therefore never match a route:
        "/recipes/"          → ("recipes",)
        "/recipes/soup"      → ("recipes", "soup")
        "/recipes//soup"     → ("recipes", "", "soup")
    """
    trimmed = path.rstrip("/")
    if trimmed.startswith("/"):
        trimmed = trimmed[1:]
    if not trimmed:
        return ()
    return tuple(trimmed.split("/"))


def match_route(method: str, path: str) -> Tuple[Route, Dict[str, str]]:
    """
    Find the first route matching `method` and `path`.

    Raises:
        RouteNotFoundError: no rule matches, including ids that fail the grammar.
    """
    verb = method.upper()
    parts = split_path(path)
    for route in ROUTES:
        params = route.match(verb, parts)
        if params is not None:
            return route, params
    raise RouteNotFoundError(verb, path)


class RecipeDispatcher:
    """
    Routes requests into a RecipeStore and translates the outcome.

    Holds no state across requests apart from the injected store, so one
    instance is shared by every concurrent request.
    """

    def __init__(self, store: RecipeStore):
        self.store = store
        self._actions: Dict[str, Callable[..., DispatchResult]] = {
            "list_recipes": self.list_recipes,
            "create_recipe": self.create_recipe,
            "get_recipe": self.get_recipe,
            "update_recipe": self.update_recipe,
            "delete_recipe": self.delete_recipe,
        }

    def dispatch(
        self,
        method: str,
        path: str,
        body: bytes = b"",
        request_id: str = "",
    ) -> DispatchResult:
        """
        Handle one request end to end. Never raises.

        Args:
            method:     HTTP method, any case
            path:       URL path, e.g. "/recipes/tomato-soup"
            body:       Raw request body (only read by create and update)
            request_id: Correlation id echoed in error payloads and log lines
        """
        action: Optional[str] = None
        params: Dict[str, str] = {}
        try:
            route, params = match_route(method, path)
            action = route.action
            result = self._actions[action](body=body, **params)
        except ValidationError as e:
            logger.warning("[%s] Validation error: %s", request_id, e.message)
            result = self._error(
                400, "validation_error", e.message, request_id,
                details={"errors": e.errors} if e.errors else e.context or None,
            )
        except RouteNotFoundError as e:
            logger.info("[%s] %s", request_id, e.message)
            result = self._error(404, "route_not_found", e.message, request_id)
        except NotFoundError as e:
            result = self._error(404, "not_found", e.message, request_id)
        except StoreError as e:
            logger.error("[%s] Store error: %s | Context: %s", request_id, e.message, e.context)
            result = self._error(500, "internal_server_error", INTERNAL_ERROR_MESSAGE, request_id)
        except Exception as e:
            logger.error(
                "[%s] Unexpected error dispatching %s %s: %s",
                request_id,
                method,
                path,
                str(e),
                exc_info=True,
            )
            result = self._error(500, "internal_server_error", INTERNAL_ERROR_MESSAGE, request_id)
        return replace(
            result,
            action=action,
            recipe_id=params.get("recipe_id", result.recipe_id),
        )

    # ── Actions ───────────────────────────────────────────────────────────

    def list_recipes(self, body: bytes = b"") -> DispatchResult:
        return DispatchResult(200, encode_recipes(self.store.list()))

    def create_recipe(self, body: bytes = b"") -> DispatchResult:
        recipe = decode_recipe(body)
        recipe_id = slugify(recipe.name)
        if not recipe_id:
            raise ValidationError(
                message=f"Recipe name '{recipe.name}' does not contain any letters or digits",
                field="name",
            )
        self.store.add(recipe_id, recipe)
        return DispatchResult(
            201,
            encode_model(CreatedResponse(id=recipe_id, recipe=recipe)),
            recipe_id=recipe_id,
        )

    def get_recipe(self, recipe_id: str, body: bytes = b"") -> DispatchResult:
        return DispatchResult(200, encode_recipe(self.store.get(recipe_id)))

    def update_recipe(self, recipe_id: str, body: bytes = b"") -> DispatchResult:
        recipe = decode_recipe(body)
        self.store.update(recipe_id, recipe)
        return DispatchResult(200, encode_recipe(recipe))

    def delete_recipe(self, recipe_id: str, body: bytes = b"") -> DispatchResult:
        self.store.remove(recipe_id)
        return DispatchResult(200, encode_model(StatusResponse()))

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _error(
        status_code: int,
        error: str,
        message: str,
        request_id: str,
        details: Optional[dict] = None,
    ) -> DispatchResult:
        payload = error_payload(error, message, request_id, details)
        return DispatchResult(status_code, encode_model(payload), error=error)


def error_payload(
    error: str,
    message: str,
    request_id: str,
    details: Optional[dict] = None,
) -> ErrorResponse:
    """The one error body shape shared by the dispatcher and the app's catch-all."""
    return ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=request_id or None,
    )
