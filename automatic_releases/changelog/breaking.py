"""Classifies commits that introduce breaking changes."""

from automatic_releases.utils.constants import BREAKING_CHANGE_MARKER


def is_breaking(body: str | None, footer: str | None) -> bool:
    """Whether the body or footer of a commit message carries the 'BREAKING CHANGE:' marker."""
    return any(BREAKING_CHANGE_MARKER in text for text in (body, footer) if text)
