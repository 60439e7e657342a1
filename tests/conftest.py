from __future__ import annotations

from pathlib import Path
import re
import sys
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from recipe_store.errors import DuplicateRecipeError, MalformedRecipeIdError
from recipe_store.models import Ingredient, Recipe
from recipe_store.schemas import RecipeInput, RecipeUpdateInput

_HEX_ID = re.compile(r"[0-9a-f]{32}")


class TickingClock:
    """Clock that moves forward one second every time it is read."""

    def __init__(self) -> None:
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class InMemoryRecipeStorage:
    """Simple storage backend used for tests.

    Ids are uuid4 hex strings; anything else is rejected as malformed.
    """

    def __init__(self, clock: Optional[TickingClock] = None) -> None:
        self._recipes: Dict[str, Recipe] = {}
        self._clock = clock or TickingClock()

    def insert(self, recipe: RecipeInput) -> Recipe:
        if any(existing.title == recipe.title for existing in self._recipes.values()):
            raise DuplicateRecipeError(
                f"A recipe titled '{recipe.title}' already exists.", status_code=409
            )
        now = self._clock()
        stored = Recipe(
            id=uuid.uuid4().hex,
            title=recipe.title,
            description=recipe.description,
            ingredients=[
                Ingredient(name=item.name, amount=item.amount) for item in recipe.ingredients
            ],
            preparation_time=recipe.preparation_time,
            portions=recipe.portions,
            is_vegetarian=recipe.is_vegetarian,
            created_at=now,
            updated_at=now,
        )
        self._recipes[stored.id] = stored
        return stored

    def find_all(self) -> List[Recipe]:
        return list(self._recipes.values())

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(self._check_id(recipe_id))

    def update_by_id(self, recipe_id: str, changes: RecipeUpdateInput) -> Optional[Recipe]:
        recipe = self._recipes.get(self._check_id(recipe_id))
        if recipe is None:
            return None

        fields = changes.changes()
        title = fields.get("title")
        if title is not None and any(
            existing.title == title and existing.id != recipe_id
            for existing in self._recipes.values()
        ):
            raise DuplicateRecipeError(f"A recipe titled '{title}' already exists.", status_code=409)

        if "ingredients" in fields:
            fields["ingredients"] = [Ingredient(**item) for item in fields["ingredients"]]
        for name, value in fields.items():
            setattr(recipe, name, value)
        recipe.updated_at = self._clock()
        return recipe

    def delete_by_id(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.pop(self._check_id(recipe_id), None)

    def ping(self) -> None:
        return None

    def _check_id(self, recipe_id: str) -> str:
        if not isinstance(recipe_id, str) or not _HEX_ID.fullmatch(recipe_id):
            raise MalformedRecipeIdError(f"'{recipe_id}' is not a valid recipe id.")
        return recipe_id


@pytest.fixture
def storage() -> InMemoryRecipeStorage:
    return InMemoryRecipeStorage()


@pytest.fixture
def spinach_pie() -> dict:
    return {
        "title": "Spinach Pie",
        "description": "Vegetarian pie with spinach and cheese.",
        "ingredients": [
            {"name": "Spinach", "amount": "300g"},
            {"name": "Cream cheese", "amount": "150g"},
            {"name": "Eggs", "amount": "2 units"},
        ],
        "preparationTime": 45,
        "portions": 4,
        "isVegetarian": True,
    }
