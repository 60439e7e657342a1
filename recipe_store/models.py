from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Ingredient:
    """A single ingredient line embedded in a recipe."""

    name: str
    amount: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "amount": self.amount}


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    title: str
    preparation_time: float
    portions: int
    description: Optional[str] = None
    ingredients: List[Ingredient] = field(default_factory=list)
    is_vegetarian: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render the recipe using the public camelCase field names."""

        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "preparationTime": self.preparation_time,
            "portions": self.portions,
            "isVegetarian": self.is_vegetarian,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


__all__ = ["Ingredient", "Recipe"]
