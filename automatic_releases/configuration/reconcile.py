"""Reconcile release configuration from CLI arguments and environment variables."""

import json
import re

import structlog

from automatic_releases.configuration.env import ActionsContext
from automatic_releases.configuration.exceptions import RequiredConfigurationElementError
from automatic_releases.configuration.models import ReleaseConfig
from automatic_releases.utils.github import split_repository

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

FILES_SEPARATOR_PATTERN = re.compile(r"\r?\n")


def split_file_globs(files: str | None) -> list[str]:
    """Split the newline-separated files input into glob patterns, dropping blank lines."""
    if not files:
        return []
    return [pattern.strip() for pattern in FILES_SEPARATOR_PATTERN.split(files) if pattern.strip()]


def validate_repo_token(repo_token: str | None) -> str:
    """Return the repository token, raising when it is missing."""
    if not repo_token:
        raise RequiredConfigurationElementError(name="Repository token", cli_name="repo_token", env_name="INPUT_REPO_TOKEN")
    return repo_token


def validate_release_configuration(
    repo_token: str | None,
    automatic_release_tag: str | None,
    draft: bool,
    prerelease: bool,
    title: str | None,
    files: str | None,
    strict_pull_request_lookup: bool = True,
) -> ReleaseConfig:
    """Validates the inputs of a release run.

    Args:
        repo_token (str | None): Token used to access the repository.
        automatic_release_tag (str | None): Floating tag to (re)create, e.g. 'latest'.
        draft (bool): Whether to create the release as a draft.
        prerelease (bool): Whether to mark the release as a pre-release.
        title (str | None): Release title, defaulting to the release tag.
        files (str | None): Newline-separated glob patterns of files to upload.
        strict_pull_request_lookup (bool): Whether a failed pull request lookup aborts the run.

    Raises:
        RequiredConfigurationElementError: If no repository token is provided.

    Returns:
        ReleaseConfig: The validated release configuration.
    """
    return ReleaseConfig(
        repo_token=validate_repo_token(repo_token),
        automatic_release_tag=automatic_release_tag or None,
        draft=draft,
        prerelease=prerelease,
        title=title or None,
        files=split_file_globs(files),
        strict_pull_request_lookup=strict_pull_request_lookup,
    )


def validate_actions_context(context: ActionsContext) -> tuple[str, str]:
    """Validates the runner environment and splits the repository into owner and name.

    Raises:
        RequiredConfigurationElementError: If the repository or commit SHA is missing.
        ValueError: If the repository is not in 'owner/repo' format.
    """
    if not context.GITHUB_REPOSITORY:
        raise RequiredConfigurationElementError(name="Repository", cli_name="repo", env_name="GITHUB_REPOSITORY")
    if not context.GITHUB_SHA:
        raise RequiredConfigurationElementError(name="Commit SHA", cli_name="sha", env_name="GITHUB_SHA")
    owner, repo_name = split_repository(context.GITHUB_REPOSITORY)
    logger.debug("Validated runner environment", owner=owner, repo_name=repo_name, ref=context.GITHUB_REF, sha=context.GITHUB_SHA)
    return owner, repo_name


def load_event_payload(context: ActionsContext) -> dict | None:
    """Read the JSON payload of the triggering event, if the runner provides one."""
    if context.GITHUB_EVENT_PATH is None or not context.GITHUB_EVENT_PATH.is_file():
        return None
    return json.loads(context.GITHUB_EVENT_PATH.read_text(encoding="utf-8"))
