"""Shared constants used across the application."""

import re

# Commit Message Constants
# ------------------------

HEADER_PATTERN = re.compile(r"^(\w*)(?:\(([^()\r\n]*)\))?(!)?: (.*)$")
"""Pattern to match a conventional commit header (e.g., feat(api)!: add endpoint)."""

MERGE_PATTERN = re.compile(
    r"^Merge (?:pull request #\d+ from \S+|(?:remote-tracking )?branch '[^']+'|tag '[^']+'|commit '[^']+')"
)
"""Pattern to match merge commit headers created by GitHub or git itself."""

REVERT_PATTERN = re.compile(r"^(?:Revert|revert:)\s\"?([\s\S]+?)\"?\s*This reverts commit (\w*)\.", re.IGNORECASE)
"""Pattern to match a revert commit message (e.g., Revert "feat: x" This reverts commit abc123.)."""

FOOTER_TOKEN_PATTERN = re.compile(r"^(BREAKING[ -]CHANGE|[\w-]+)(: | #)(.*)$")
"""Pattern to match a footer token line (e.g., Reviewed-by: Z, Refs #123, BREAKING CHANGE: x)."""

BREAKING_CHANGE_NOTE_TOKENS = frozenset({"BREAKING CHANGE", "BREAKING-CHANGE"})
"""Footer tokens recorded as breaking change notes."""

BREAKING_CHANGE_MARKER = "BREAKING CHANGE:"
"""Literal marker that flags a commit body or footer as a breaking change."""

# Tag and Version Constants
# -------------------------

TAG_REF_PATTERN = re.compile(r"^(refs/)?tags/(.*)$")
"""Pattern to extract the tag name from a git ref (e.g., refs/tags/v1.0.0)."""

VERSION_PREFIX_PATTERN = re.compile(r"^\s*v?")
"""Leading whitespace and lowercase 'v' tolerated in front of a semantic version in a tag name."""

MAX_VERSION_LENGTH = 256
"""Longest tag name considered as a semantic version candidate."""

START_OF_HISTORY_REF = "HEAD"
"""Compare base used when the previous release reference does not exist."""

# Changelog Constants
# -------------------

CONVENTIONAL_COMMIT_TYPES: dict[str, str] = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "docs": "Documentation",
    "style": "Styles",
    "refactor": "Code Refactoring",
    "perf": "Performance Improvements",
    "test": "Tests",
    "build": "Builds",
    "ci": "Continuous Integration",
    "chore": "Chores",
    "revert": "Reverts",
}
"""Section titles for known commit types, in rendering order."""

BREAKING_CHANGES_SECTION_TITLE = "Breaking Changes"
"""Section listing every breaking commit, rendered first."""

UNCATEGORIZED_SECTION_TITLE = "Commits"
"""Catch-all section for commits with an absent or unknown type."""

BREAKING_CHANGE_ENTRY_MARKER = "**BREAKING**"
"""Marker prepended to breaking entries inside their type section."""

SHORT_SHA_LENGTH = 7
"""Number of characters of a commit SHA shown in the changelog."""

# Release Constants
# -----------------

RELEASE_TAG_OUTPUT = "automatic_releases_tag"
RELEASE_ID_OUTPUT = "release_id"
UPLOAD_URL_OUTPUT = "upload_url"
RELEASE_TAG_ENV_VAR = "AUTOMATIC_RELEASES_TAG"

ASSET_CONTENT_TYPE = "application/octet-stream"
"""Content type used for every uploaded release asset."""
