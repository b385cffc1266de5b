"""Pydantic Settings model for the GitHub Actions runner environment."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ActionsContext(BaseSettings):
    """Environment variables describing the workflow run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    # Repository and triggering commit
    GITHUB_REPOSITORY: str | None = None
    GITHUB_REF: str | None = None
    GITHUB_SHA: str | None = None
    GITHUB_EVENT_PATH: Path | None = None

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"

    # Step output and environment files
    GITHUB_OUTPUT: Path | None = None
    GITHUB_ENV: Path | None = None

    # Runner settings
    GITHUB_ACTIONS: bool = False
    RUNNER_DEBUG: bool = False
