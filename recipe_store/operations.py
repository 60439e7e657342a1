"""Recipe operations.

Each operation takes the storage gateway explicitly, performs a single storage
call and reports the outcome as a :class:`QueryResponse`. Errors never
propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .errors import RecipeNotFoundError, RecipeStoreError
from .responses import ErrorDetails, QueryResponse, create_query_response
from .schemas import parse_recipe_input, parse_recipe_update
from .storage import RecipeRepository

logger = logging.getLogger(__name__)

NOT_FOUND_DETAILS = "Recipe not found"


def _failure(message: str, exc: Exception) -> QueryResponse:
    if isinstance(exc, RecipeStoreError):
        logger.warning("%s: %s", message, exc.details)
        error = ErrorDetails(details=exc.details, status_code=exc.status_code)
    else:
        logger.exception(message)
        error = ErrorDetails(details=str(exc) or "Unknown error occurred", status_code=500)
    return create_query_response(success=False, message=message, error=error)


def create_recipe(storage: RecipeRepository, payload: Mapping[str, Any]) -> QueryResponse:
    """Validate ``payload`` and store it as a new recipe."""

    try:
        recipe = storage.insert(parse_recipe_input(payload))
    except Exception as exc:
        return _failure("Recipe creation failed", exc)

    return create_query_response(
        success=True, message="Recipe created successfully", data=recipe
    )


def list_recipes(storage: RecipeRepository) -> QueryResponse:
    try:
        recipes = storage.find_all()
    except Exception as exc:
        return _failure("Failed to retrieve recipes", exc)

    message = "Recipes found" if recipes else "No recipes available"
    return create_query_response(success=True, message=message, data=recipes)


def get_recipe(storage: RecipeRepository, recipe_id: str) -> QueryResponse:
    try:
        recipe = storage.find_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(NOT_FOUND_DETAILS)
    except Exception as exc:
        return _failure("Failed to retrieve recipe", exc)

    return create_query_response(success=True, message="Recipe found", data=recipe)


def update_recipe(
    storage: RecipeRepository, recipe_id: str, payload: Mapping[str, Any]
) -> QueryResponse:
    """Apply a partial update; fields missing from ``payload`` are kept."""

    try:
        recipe = storage.update_by_id(recipe_id, parse_recipe_update(payload))
        if recipe is None:
            raise RecipeNotFoundError(NOT_FOUND_DETAILS)
    except Exception as exc:
        return _failure("Recipe update failed", exc)

    return create_query_response(
        success=True, message="Recipe updated successfully", data=recipe
    )


def delete_recipe(storage: RecipeRepository, recipe_id: str) -> QueryResponse:
    try:
        recipe = storage.delete_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(NOT_FOUND_DETAILS)
    except Exception as exc:
        return _failure("Recipe deletion failed", exc)

    return create_query_response(
        success=True, message="Recipe deleted successfully", data=recipe
    )


__all__ = [
    "create_recipe",
    "delete_recipe",
    "get_recipe",
    "list_recipes",
    "update_recipe",
]
