"""Conventional commit parsing and changelog rendering."""

from .breaking import is_breaking
from .markdown import render_changelog
from .models import ChangelogSection, Commit, ParsedCommit, ParsedMessage, PullRef, Tag
from .parser import parse_commit_message

__all__ = [
    "Commit",
    "PullRef",
    "Tag",
    "ParsedMessage",
    "ParsedCommit",
    "ChangelogSection",
    "is_breaking",
    "parse_commit_message",
    "render_changelog",
]
