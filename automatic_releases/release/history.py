"""Commit history retrieval between two releases."""

import structlog

from automatic_releases.changelog.models import Commit
from automatic_releases.github.abc import GitHubClientBase
from automatic_releases.release.exceptions import ComparisonFailure
from automatic_releases.release.models import RefNotFound
from automatic_releases.utils.constants import START_OF_HISTORY_REF

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class CommitHistoryFetcher:
    """Fetches the commits made since the previous release."""

    def __init__(self, client: GitHubClientBase, log: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize with the GitHub client used to resolve refs and compare commits."""
        self.client = client
        self.log = log or logger

    async def resolve_base(self, previous_tag: str) -> str:
        """Resolve the compare base for the previous release tag.

        Falls back to the start of history when the tag's ref does not exist,
        which is the case for the first release.
        """
        if not previous_tag:
            self.log.info("No previous release tag, retrieving commits from the start of history")
            return START_OF_HISTORY_REF
        lookup = await self.client.get_ref(f"tags/{previous_tag}")
        if isinstance(lookup, RefNotFound):
            self.log.info(
                "Could not find SHA corresponding to previous release tag, assuming this is the first release",
                ref=lookup.ref,
                reason=lookup.reason,
            )
            return START_OF_HISTORY_REF
        self.log.info("Found previous release tag", ref=lookup.ref, sha=lookup.sha)
        return previous_tag

    async def commits_between(self, previous_tag: str, current_sha: str) -> list[Commit]:
        """List the commits between the previous release tag and the current commit.

        Commits keep the order GitHub returns them in. An empty list is
        returned when the comparison fails (e.g. unrelated histories).
        """
        base = await self.resolve_base(previous_tag)
        self.log.info("Retrieving commits", base=base, head=current_sha)
        try:
            commits = await self.client.compare_commits(base, current_sha)
        except ComparisonFailure as exc:
            self.log.warning("Could not find any commits", base=base, head=current_sha, reason=exc.reason)
            return []
        self.log.info(f"Successfully retrieved {len(commits)} commits", base=base, head=current_sha)
        return commits
