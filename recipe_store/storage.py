from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Recipe
from .schemas import RecipeInput, RecipeUpdateInput


class RecipeRepository(Protocol):
    """Protocol describing the storage primitives used by the operations.

    Implementations raise the exceptions from :mod:`recipe_store.errors` and
    return ``None`` when a well-formed id matches no recipe.
    """

    def insert(self, recipe: RecipeInput) -> Recipe:
        """Persist a new recipe, raising :class:`DuplicateRecipeError` on a taken title."""

    def find_all(self) -> List[Recipe]:
        """Return every stored recipe, oldest first."""

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Return a single recipe or ``None`` if missing."""

    def update_by_id(self, recipe_id: str, changes: RecipeUpdateInput) -> Optional[Recipe]:
        """Apply the supplied fields and return the updated recipe."""

    def delete_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Remove a recipe and return it as it was before deletion."""

    def ping(self) -> None:
        """Check that the backend is reachable, failing fast."""


__all__ = ["RecipeRepository"]
