"""Command-line entrypoint for the recipe store.

Connects to Firestore using the settings from the environment (or ``.env``)
and logs the outcome of listing the stored recipes. A missing ``GCP_PROJECT``
or an unreachable database terminates the process with status 1.
"""

import logging

from recipe_store import connect_db, list_recipes
from recipe_store.app_logging import configure_logging

logger = logging.getLogger("recipe_store.main")


def main() -> None:
    configure_logging()
    storage = connect_db()

    response = list_recipes(storage)
    count = len(response.data) if isinstance(response.data, list) else 0
    logger.info("%s (%d)", response.message, count)


if __name__ == "__main__":
    main()


__all__ = ["main"]
