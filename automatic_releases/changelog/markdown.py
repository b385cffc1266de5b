"""Markdown rendering of parsed commits into a changelog."""

from automatic_releases.changelog.models import ChangelogSection, ParsedCommit
from automatic_releases.utils.constants import (
    BREAKING_CHANGE_ENTRY_MARKER,
    BREAKING_CHANGES_SECTION_TITLE,
    CONVENTIONAL_COMMIT_TYPES,
    UNCATEGORIZED_SECTION_TITLE,
)


def format_pull_requests(parsed_commit: ParsedCommit) -> str:
    """Link the pull requests of a commit, e.g. '[#1](url),[#2](url)'."""
    return ",".join(f"[#{pr.number}]({pr.url})" for pr in parsed_commit.pull_requests)


def format_author(parsed_commit: ParsedCommit) -> str:
    """Credit the commit author, linked to the commit when its URL is known."""
    commit = parsed_commit.commit
    author = commit.author or commit.short_sha
    if commit.html_url:
        return f"[{author}]({commit.html_url})"
    return author


def format_entry(parsed_commit: ParsedCommit, mark_breaking: bool = False) -> str:
    """Format a single changelog bullet for a commit."""
    pull_requests = format_pull_requests(parsed_commit)
    pull_requests = f" {pull_requests}" if pull_requests else ""

    if parsed_commit.type not in CONVENTIONAL_COMMIT_TYPES:
        commit = parsed_commit.commit
        author = f" ({commit.author})" if commit.author else ""
        return f"- {commit.short_sha}: {parsed_commit.header or ''}{author}{pull_requests}"

    marker = f"{BREAKING_CHANGE_ENTRY_MARKER} " if mark_breaking and parsed_commit.breaking else ""
    scope = f"**{parsed_commit.scope}**: " if parsed_commit.scope else ""
    return f"- {marker}{scope}{parsed_commit.subject}{pull_requests} ({format_author(parsed_commit)})"


def build_sections(parsed_commits: list[ParsedCommit]) -> list[ChangelogSection]:
    """Group parsed commits into changelog sections.

    Breaking changes come first, followed by one section per known commit type
    in a fixed order and a catch-all section for everything else. Commits keep
    their relative order inside every section and empty sections are omitted.
    """
    sections: list[ChangelogSection] = []

    breaking = [format_entry(pc) for pc in parsed_commits if pc.breaking]
    if breaking:
        sections.append(ChangelogSection(title=BREAKING_CHANGES_SECTION_TITLE, entries=tuple(breaking)))

    for commit_type, title in CONVENTIONAL_COMMIT_TYPES.items():
        entries = [format_entry(pc, mark_breaking=True) for pc in parsed_commits if pc.type == commit_type]
        if entries:
            sections.append(ChangelogSection(title=title, entries=tuple(entries)))

    uncategorized = [format_entry(pc) for pc in parsed_commits if pc.type not in CONVENTIONAL_COMMIT_TYPES]
    if uncategorized:
        sections.append(ChangelogSection(title=UNCATEGORIZED_SECTION_TITLE, entries=tuple(uncategorized)))

    return sections


def render_sections(sections: list[ChangelogSection]) -> str:
    """Render changelog sections as markdown, separated by blank lines."""
    blocks = ["\n".join([f"## {section.title}", *section.entries]) for section in sections]
    return "\n\n".join(blocks)


def render_changelog(parsed_commits: list[ParsedCommit]) -> str:
    """Render parsed commits as a markdown changelog ('' when there is nothing to list)."""
    return render_sections(build_sections(parsed_commits))
