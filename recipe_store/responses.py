from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .models import Recipe

RecipeData = Union[Recipe, List[Recipe]]


@dataclass(frozen=True)
class ErrorDetails:
    details: str
    status_code: int = 500

    def to_dict(self) -> Dict[str, Any]:
        return {"details": self.details, "statusCode": self.status_code}


@dataclass(frozen=True)
class QueryResponse:
    """Uniform outcome of every recipe operation."""

    success: bool
    message: str
    data: Optional[RecipeData] = None
    error: Optional[ErrorDetails] = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("A successful response cannot carry an error.")
        if not self.success:
            if self.error is None:
                raise ValueError("A failed response must carry an error.")
            if self.data is not None:
                raise ValueError("A failed response cannot carry data.")

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.data, list):
            data: Any = [recipe.to_dict() for recipe in self.data]
        elif self.data is not None:
            data = self.data.to_dict()
        else:
            data = None

        return {
            "success": self.success,
            "message": self.message,
            "data": data,
            "error": self.error.to_dict() if self.error else None,
        }


def create_query_response(
    *,
    success: bool,
    message: str,
    data: Optional[RecipeData] = None,
    error: Optional[ErrorDetails] = None,
) -> QueryResponse:
    """Build a :class:`QueryResponse`.

    ``data`` and ``error`` default to ``None``. A failed response must carry an
    error and no data; a successful one must not carry an error.
    """

    return QueryResponse(success=success, message=message, data=data, error=error)


__all__ = ["ErrorDetails", "QueryResponse", "create_query_response"]
