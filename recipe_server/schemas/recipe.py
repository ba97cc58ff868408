"""
Recipe Server: Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract, plus the JSON serializer
       the dispatcher uses to decode request bodies and encode responses.
Why:   Strict input validation and one place that knows the wire field names
       (`name`, `ingredients`, nested `name`).
How:   `decode_recipe()` validates raw bytes straight into a Recipe and turns
       pydantic's error into our ValidationError. The `encode_*` helpers dump
       models to JSON bytes.
Who:   Used by the dispatcher (decode/encode) and the health route.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from recipe_server.exceptions import ValidationError


# ══════════════════════════════════════════════════════════════════════════
# Domain Models: what clients send and receive
# ══════════════════════════════════════════════════════════════════════════


class Ingredient(BaseModel):
    """A single ingredient of a recipe."""
    name: str = Field(description="Ingredient name")


class Recipe(BaseModel):
    """
    What:  A recipe as stored and as exchanged over HTTP.
    Who:   Body of POST /recipes and PUT /recipes/{id}; returned by GET.

    The store key is derived from `name` once, on creation. Renaming a recipe
    through PUT keeps its original id.
    """
    name: str = Field(min_length=1, description="Display name; its slug is the recipe id")
    ingredients: List[Ingredient] = Field(
        default_factory=list,
        description="Ordered list of ingredients",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StatusResponse(BaseModel):
    """Empty success payload for DELETE."""
    status: str = Field(default="success")


class CreatedResponse(BaseModel):
    """
    What:  Returned by POST /recipes with HTTP 201 Created.
    Why include the id: the client needs it to address the recipe afterwards,
    and it is derived server-side from the name.
    """
    status: str = Field(default="success")
    id: str = Field(description="Id the recipe was stored under")
    recipe: Recipe


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "recipe with ID 'tomato-soup' was not found",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    recipes: int = Field(description="Number of recipes currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Serializer
# ══════════════════════════════════════════════════════════════════════════

_recipe_map = TypeAdapter(Dict[str, Recipe])


def decode_recipe(raw: bytes) -> Recipe:
    """
    Decode a JSON request body into a Recipe.

    Raises:
        ValidationError: body is not JSON, or does not have the Recipe shape.
            `errors` lists each offending field with its location.
    """
    try:
        return Recipe.model_validate_json(raw)
    except PydanticValidationError as e:
        errors = [
            {
                "loc": list(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in e.errors()
        ]
        raise ValidationError(
            message="Request body is not a valid recipe",
            errors=errors,
            context={"error_count": e.error_count()},
        ) from e


def encode_recipe(recipe: Recipe) -> bytes:
    return recipe.model_dump_json().encode("utf-8")


def encode_recipes(recipes: Dict[str, Recipe]) -> bytes:
    """Encode an id → recipe mapping as a JSON object."""
    return _recipe_map.dump_json(recipes)


def encode_model(model: BaseModel) -> bytes:
    return model.model_dump_json().encode("utf-8")
