"""Error taxonomy shared by the storage gateways and the operations.

Gateways raise these instead of leaking client library exceptions, so the
operations only ever have to deal with a closed set of failure kinds.
"""

from __future__ import annotations


class RecipeStoreError(Exception):
    """Base class for every failure surfaced by the recipe store."""

    status_code: int = 500

    def __init__(self, details: str, *, status_code: int | None = None) -> None:
        super().__init__(details)
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class InvalidRecipeError(RecipeStoreError):
    """The payload does not satisfy the recipe constraints."""

    status_code = 400


class RecipeNotFoundError(RecipeStoreError):
    """No recipe matches the requested id."""

    status_code = 404


class DuplicateRecipeError(RecipeStoreError):
    """A recipe with the same title already exists.

    Carries the status code reported by the storage backend when it has one.
    """

    status_code = 500


class MalformedRecipeIdError(RecipeStoreError):
    """The id is not a valid document id for the storage backend."""

    status_code = 400


class StorageUnavailableError(RecipeStoreError):
    """The storage backend could not be reached or rejected the command."""

    status_code = 500


__all__ = [
    "DuplicateRecipeError",
    "InvalidRecipeError",
    "MalformedRecipeIdError",
    "RecipeNotFoundError",
    "RecipeStoreError",
    "StorageUnavailableError",
]
