"""Application configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional ``.env`` file."""

    gcp_project: str = Field(min_length=1)
    firestore_database: str = "(default)"
    recipes_collection: str = "recipes"
    request_timeout: float = Field(default=5.0, gt=0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
