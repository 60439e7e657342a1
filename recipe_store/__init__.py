import logging
import sys
from typing import Optional

from pydantic import ValidationError

from .config import Settings
from .errors import (
    DuplicateRecipeError,
    InvalidRecipeError,
    MalformedRecipeIdError,
    RecipeNotFoundError,
    RecipeStoreError,
    StorageUnavailableError,
)
from .gcp_storage import FirestoreRecipeStorage
from .models import Ingredient, Recipe
from .operations import (
    create_recipe,
    delete_recipe,
    get_recipe,
    list_recipes,
    update_recipe,
)
from .responses import ErrorDetails, QueryResponse, create_query_response
from .storage import RecipeRepository

logger = logging.getLogger(__name__)


def _project_missing(exc: ValidationError) -> bool:
    return any(error["loc"] == ("gcp_project",) for error in exc.errors())


def connect_db(settings: Optional[Settings] = None) -> FirestoreRecipeStorage:
    """Connect to Firestore and return a ready storage backend.

    Parameters
    ----------
    settings:
        Optional settings. When ``None`` they are loaded from the environment
        and ``.env``.

    Missing configuration or an unreachable backend is fatal: the problem is
    logged and the process exits with status 1.
    """

    if settings is None:
        try:
            settings = Settings()
        except ValidationError as exc:
            if _project_missing(exc):
                logger.error("GCP_PROJECT is not defined in the environment variables.")
            else:
                logger.error("Invalid configuration: %s", exc)
            sys.exit(1)

    try:
        storage = FirestoreRecipeStorage.from_settings(settings)
        storage.ping()
    except RecipeStoreError as exc:
        logger.error("The connection failed: %s", exc.details)
        sys.exit(1)

    logger.info("Successful connection")
    return storage


__all__ = [
    "DuplicateRecipeError",
    "ErrorDetails",
    "FirestoreRecipeStorage",
    "Ingredient",
    "InvalidRecipeError",
    "MalformedRecipeIdError",
    "QueryResponse",
    "Recipe",
    "RecipeNotFoundError",
    "RecipeRepository",
    "RecipeStoreError",
    "Settings",
    "StorageUnavailableError",
    "connect_db",
    "create_query_response",
    "create_recipe",
    "delete_recipe",
    "get_recipe",
    "list_recipes",
    "update_recipe",
]
