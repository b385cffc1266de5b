"""Contains utility functions for GitHub interactions."""

import structlog

from automatic_releases.utils.constants import TAG_REF_PATTERN

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits a repository in 'owner/repo' format into owner and repository."""
    if repo is None:
        raise ValueError("A repository in 'owner/repo' format is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def parse_git_tag(ref: str | None) -> str:
    """Extract the tag name from a git ref such as 'refs/tags/v1.0.0'.

    Returns an empty string when the ref does not point at a tag.
    """
    match = TAG_REF_PATTERN.match(ref or "")
    if not match or not match.group(2):
        logger.debug("Ref does not appear to be a tag", ref=ref)
        return ""
    return match.group(2)
