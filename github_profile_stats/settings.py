"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .graphql import API_VERSION, GRAPHQL_URL
from .models import (
    DEFAULT_END_MARKER,
    DEFAULT_LANGUAGE_LIMIT,
    DEFAULT_START_MARKER,
    DEFAULT_TOP_LANGUAGES,
    MAX_PAGE_SIZE,
)


class Settings(BaseSettings):
    """Settings for the profile stats job.

    Every field reads from a ``GH_``-prefixed environment variable,
    e.g. ``GH_USER`` and ``GH_TOKEN``.
    """

    model_config = SettingsConfigDict(
        env_prefix="GH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user: str | None = None
    token: str | None = None

    readme_path: str = "README.md"
    start_marker: str = DEFAULT_START_MARKER
    end_marker: str = DEFAULT_END_MARKER

    api_url: str = GRAPHQL_URL
    api_version: str = API_VERSION
    timeout: float = 30.0

    page_size: int = Field(MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    language_limit: int = Field(DEFAULT_LANGUAGE_LIMIT, ge=1, le=MAX_PAGE_SIZE)
    top_languages: int = Field(DEFAULT_TOP_LANGUAGES, ge=1)

    include_org_repos: bool = True
    include_private_repos: bool = True
    show_repositories: bool = True
    show_contributions: bool = True
    show_community: bool = True
    show_languages: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
