"""Release tag resolution."""

import structlog

from automatic_releases.changelog import versions
from automatic_releases.changelog.models import Tag
from automatic_releases.github.abc import GitHubClientBase
from automatic_releases.release.exceptions import InvalidVersionError, MissingReleaseTagError
from automatic_releases.release.models import ReleaseTagPair
from automatic_releases.utils.github import parse_git_tag

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def determine_release_tag(automatic_release_tag: str | None, ref: str | None) -> str:
    """Pick the tag to release: the configured automatic tag, else the tag that triggered the run."""
    release_tag = automatic_release_tag or parse_git_tag(ref)
    if not release_tag:
        raise MissingReleaseTagError(ref)
    return release_tag


def _ensure_semantic_version(current_tag: str) -> None:
    if not versions.is_valid(current_tag):
        raise InvalidVersionError(
            current_tag,
            f'The parameter "automatic_release_tag" was not set and the current tag "{current_tag}" '
            "does not appear to conform to semantic versioning.",
        )


def find_previous_tag(current_tag: str, all_tags: list[Tag]) -> str:
    """Find the tag with the highest semantic version strictly lower than current_tag.

    Tags whose names are not semantic versions are ignored. Returns an empty
    string when there is no such tag, i.e. current_tag is the first release.

    Raises:
        InvalidVersionError: If current_tag is not a semantic version
    """
    _ensure_semantic_version(current_tag)
    candidates = [tag for tag in all_tags if tag.semver is not None]
    for tag in versions.sort_descending(candidates, key=lambda tag: tag.semver):
        if versions.less_than(tag.semver, current_tag):
            return tag.name
    return ""


class ReleaseTagResolver:
    """Resolves the release tag pair bounding the commits of a release.

    The previous release is the closest lower semantic version tag, whether
    the current tag was configured or taken from the triggering ref. A
    configured automatic release tag that is not a semantic version (e.g.
    'latest') floats instead: it is its own previous release, so the
    changelog covers the commits since the tag last moved.
    """

    def __init__(self, client: GitHubClientBase, log: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize with the GitHub client used to list tags."""
        self.client = client
        self.log = log or logger

    async def search_previous_tag(self, current_tag: str) -> str:
        """Search the repository's tags for the release preceding current_tag."""
        _ensure_semantic_version(current_tag)
        all_tags = await self.client.list_tags()
        for tag in all_tags:
            self.log.debug("Currently processing tag", tag=tag.name, semver=tag.semver)
        return find_previous_tag(current_tag, all_tags)

    async def resolve(self, automatic_release_tag: str | None, ref: str | None) -> ReleaseTagPair:
        """Pair the tag being released with the previous release tag."""
        current_tag = determine_release_tag(automatic_release_tag, ref)
        if automatic_release_tag and not versions.is_valid(current_tag):
            previous_tag = automatic_release_tag
        else:
            previous_tag = await self.search_previous_tag(current_tag)
        if previous_tag:
            self.log.info("Determined release tags", current_tag=current_tag, previous_tag=previous_tag)
        else:
            self.log.info("No previous release tag found, assuming this is the first release", current_tag=current_tag)
        return ReleaseTagPair(current=current_tag, previous=previous_tag)
