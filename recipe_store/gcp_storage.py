from __future__ import annotations

import hashlib
import logging
import re
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, List, Optional

from google.api_core import exceptions as gcloud_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from .config import Settings
from .errors import (
    DuplicateRecipeError,
    InvalidRecipeError,
    MalformedRecipeIdError,
    RecipeNotFoundError,
    StorageUnavailableError,
)
from .models import Ingredient, Recipe
from .schemas import RecipeInput, RecipeUpdateInput
from .storage import RecipeRepository

logger = logging.getLogger(__name__)

MAX_DOCUMENT_ID_BYTES = 1500
_RESERVED_ID = re.compile(r"__.*__")


def validate_recipe_id(recipe_id: Any) -> str:
    """Return ``recipe_id`` if it is a usable Firestore document id."""

    if (
        not isinstance(recipe_id, str)
        or not recipe_id
        or "/" in recipe_id
        or recipe_id in {".", ".."}
        or _RESERVED_ID.fullmatch(recipe_id)
        or len(recipe_id.encode("utf-8")) > MAX_DOCUMENT_ID_BYTES
    ):
        raise MalformedRecipeIdError(f"'{recipe_id}' is not a valid recipe id.")
    return recipe_id


def _title_key(title: str) -> str:
    return hashlib.sha256(title.encode("utf-8")).hexdigest()


def _status_code(exc: gcloud_exceptions.GoogleAPICallError) -> Optional[int]:
    return int(exc.code) if exc.code is not None else None


class FirestoreRecipeStorage(RecipeRepository):
    """Recipe storage backed by a Firestore collection.

    Titles are reserved in a companion ``<collection>_titles`` collection whose
    document ids are derived from the title. The reservation is written in the
    same batch or transaction as the recipe itself, so a second recipe with the
    same title fails with ``AlreadyExists`` instead of overwriting anything.
    """

    def __init__(
        self,
        *,
        project: Optional[str] = None,
        database: Optional[str] = None,
        collection_name: str = "recipes",
        timeout: float = 5.0,
        client: Optional[firestore.Client] = None,
    ) -> None:
        self._project = project
        self._collection_name = collection_name
        self._timeout = timeout

        if client is None:
            client = firestore.Client(project=project, database=database)
        self._firestore_client = client
        self._collection = client.collection(collection_name)
        self._titles = client.collection(f"{collection_name}_titles")

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreRecipeStorage":
        """Build a storage instance from application settings."""

        try:
            return cls(
                project=settings.gcp_project,
                database=settings.firestore_database,
                collection_name=settings.recipes_collection,
                timeout=settings.request_timeout,
            )
        except auth_exceptions.GoogleAuthError as exc:
            raise StorageUnavailableError(f"Could not create Firestore client: {exc}") from exc

    def ping(self) -> None:
        with self._translate_errors("reach Firestore"):
            self._collection.limit(1).get(retry=None, timeout=self._timeout)

    def insert(self, recipe: RecipeInput) -> Recipe:
        document = recipe.to_document()
        doc_ref = self._collection.document()

        batch = self._firestore_client.batch()
        batch.create(self._title_ref(document["title"]), {"recipe_id": doc_ref.id})
        batch.create(
            doc_ref,
            {
                **document,
                "created_at": firestore.SERVER_TIMESTAMP,
                "updated_at": firestore.SERVER_TIMESTAMP,
            },
        )

        with self._translate_errors(f"create recipe '{document['title']}'"):
            batch.commit(timeout=self._timeout)
            snapshot = doc_ref.get(timeout=self._timeout)

        if not snapshot.exists:
            raise RecipeNotFoundError(
                f"Recipe '{doc_ref.id}' was removed before it could be read back."
            )

        logger.debug("Created recipe %s", snapshot.id)
        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def find_all(self) -> List[Recipe]:
        query = self._collection.order_by("created_at", direction=firestore.Query.ASCENDING)
        with self._translate_errors("list recipes"):
            return [
                self._doc_to_recipe(doc.id, doc.to_dict() or {})
                for doc in query.stream(timeout=self._timeout)
            ]

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        doc_ref = self._collection.document(validate_recipe_id(recipe_id))
        with self._translate_errors(f"fetch recipe '{recipe_id}'"):
            snapshot = doc_ref.get(timeout=self._timeout)

        if not snapshot.exists:
            return None
        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def update_by_id(self, recipe_id: str, changes: RecipeUpdateInput) -> Optional[Recipe]:
        doc_ref = self._collection.document(validate_recipe_id(recipe_id))
        fields = changes.changes()
        timeout = self._timeout

        @firestore.transactional
        def apply(transaction: firestore.Transaction) -> bool:
            snapshot = doc_ref.get(transaction=transaction, timeout=timeout)
            if not snapshot.exists:
                return False

            current_title = (snapshot.to_dict() or {}).get("title")
            new_title = fields.get("title")
            if new_title is not None and new_title != current_title:
                transaction.create(self._title_ref(new_title), {"recipe_id": doc_ref.id})
                if current_title:
                    transaction.delete(self._title_ref(current_title))

            transaction.update(doc_ref, {**fields, "updated_at": firestore.SERVER_TIMESTAMP})
            return True

        with self._translate_errors(f"update recipe '{recipe_id}'"):
            if not apply(self._firestore_client.transaction()):
                return None
            snapshot = doc_ref.get(timeout=timeout)

        if not snapshot.exists:
            return None
        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def delete_by_id(self, recipe_id: str) -> Optional[Recipe]:
        doc_ref = self._collection.document(validate_recipe_id(recipe_id))
        timeout = self._timeout

        @firestore.transactional
        def remove(transaction: firestore.Transaction) -> Optional[Recipe]:
            snapshot = doc_ref.get(transaction=transaction, timeout=timeout)
            if not snapshot.exists:
                return None

            data = snapshot.to_dict() or {}
            transaction.delete(doc_ref)
            if data.get("title"):
                transaction.delete(self._title_ref(data["title"]))
            return self._doc_to_recipe(snapshot.id, data)

        with self._translate_errors(f"delete recipe '{recipe_id}'"):
            return remove(self._firestore_client.transaction())

    def _title_ref(self, title: str) -> firestore.DocumentReference:
        return self._titles.document(_title_key(title))

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except gcloud_exceptions.AlreadyExists as exc:
            raise DuplicateRecipeError(
                f"Could not {action}: a recipe with this title already exists.",
                status_code=_status_code(exc),
            ) from exc
        except gcloud_exceptions.InvalidArgument as exc:
            raise InvalidRecipeError(f"Could not {action}: {exc.message}") from exc
        except (
            gcloud_exceptions.GoogleAPICallError,
            gcloud_exceptions.RetryError,
            auth_exceptions.GoogleAuthError,
        ) as exc:
            raise StorageUnavailableError(f"Could not {action}: {exc}") from exc

    def _doc_to_recipe(self, doc_id: str, data: dict) -> Recipe:
        raw_ingredients = data.get("ingredients")
        if isinstance(raw_ingredients, list):
            ingredients = [
                Ingredient(name=item.get("name", ""), amount=item.get("amount", ""))
                for item in raw_ingredients
                if isinstance(item, dict)
            ]
        else:
            ingredients = []

        created_at = data.get("created_at")
        updated_at = data.get("updated_at")

        return Recipe(
            id=doc_id,
            title=data.get("title", ""),
            description=data.get("description"),
            ingredients=ingredients,
            preparation_time=data.get("preparation_time", 0),
            portions=data.get("portions", 0),
            is_vegetarian=data.get("is_vegetarian", True),
            created_at=created_at if isinstance(created_at, datetime) else None,
            updated_at=updated_at if isinstance(updated_at, datetime) else None,
        )


__all__ = ["FirestoreRecipeStorage", "validate_recipe_id"]
