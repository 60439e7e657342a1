"""Validation models for recipe payloads.

Payloads may use either the camelCase names (``preparationTime``) or the
attribute names (``preparation_time``). Unknown keys, including ``id`` and the
timestamps, are ignored.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError
from pydantic.alias_generators import to_camel

from .errors import InvalidRecipeError

TrimmedTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedText = Annotated[str, StringConstraints(strip_whitespace=True)]
RequiredText = Annotated[str, StringConstraints(min_length=1)]
PreparationTime = Annotated[float, Field(gt=0)]
Portions = Annotated[int, Field(gt=0)]

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class IngredientInput(_Payload):
    name: RequiredText
    amount: RequiredText


class RecipeInput(_Payload):
    """Payload accepted when creating a recipe."""

    title: TrimmedTitle
    description: Optional[TrimmedText] = None
    ingredients: List[IngredientInput]
    preparation_time: PreparationTime
    portions: Portions
    is_vegetarian: bool = True

    def to_document(self) -> Dict[str, Any]:
        """Return the fields to persist, keyed by attribute name."""

        return self.model_dump()


class RecipeUpdateInput(_Payload):
    """Partial payload accepted when updating a recipe.

    Only the fields present in the payload are changed; ``None`` counts as
    absent.
    """

    title: Optional[TrimmedTitle] = None
    description: Optional[TrimmedText] = None
    ingredients: Optional[List[IngredientInput]] = None
    preparation_time: Optional[PreparationTime] = None
    portions: Optional[Portions] = None
    is_vegetarian: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "payload"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def _parse(model: Type[_ModelT], payload: Any) -> _ModelT:
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidRecipeError(
            f"Recipe payload must be a mapping, got {type(payload).__name__}."
        )
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidRecipeError(_describe(exc)) from exc


def parse_recipe_input(payload: Any) -> RecipeInput:
    """Validate a creation payload or raise :class:`InvalidRecipeError`."""

    return _parse(RecipeInput, payload)


def parse_recipe_update(payload: Any) -> RecipeUpdateInput:
    """Validate an update payload or raise :class:`InvalidRecipeError`."""

    return _parse(RecipeUpdateInput, payload)


__all__ = [
    "IngredientInput",
    "RecipeInput",
    "RecipeUpdateInput",
    "parse_recipe_input",
    "parse_recipe_update",
]
