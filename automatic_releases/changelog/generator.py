"""Changelog generation from the commits of a release."""

import structlog

from automatic_releases.changelog.breaking import is_breaking
from automatic_releases.changelog.markdown import render_changelog
from automatic_releases.changelog.models import Commit, ParsedCommit, PullRef
from automatic_releases.changelog.parser import parse_commit_message
from automatic_releases.github.abc import GitHubClientBase
from automatic_releases.release.exceptions import LookupFailure

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_commit(commit: Commit) -> ParsedCommit | None:
    """Parse a commit into a changelog record, or None for merge commits."""
    parsed_message = parse_commit_message(commit.message)
    if parsed_message.merge:
        return None
    return ParsedCommit(
        header=parsed_message.header,
        body=parsed_message.body,
        footer=parsed_message.footer,
        type=parsed_message.type,
        scope=parsed_message.scope,
        subject=parsed_message.subject,
        breaking=parsed_message.breaking_indicator or is_breaking(parsed_message.body, parsed_message.footer),
        pull_requests=commit.pull_requests,
        commit=commit,
    )


class ChangelogGenerator:
    """Builds the markdown changelog for a list of commits.

    Pull requests are looked up one commit at a time, in commit order, so the
    rendered changelog only depends on the commits and their pull requests.

    When ``strict_pull_request_lookup`` is set (the default), a failed pull
    request lookup aborts generation. Otherwise the failure is logged and the
    commit is listed without pull requests.

    A commit is breaking when its body or footer carries a ``BREAKING CHANGE:``
    marker, and also when its header has the ``!`` indicator (``feat!: ...``).
    """

    def __init__(self, client: GitHubClientBase, strict_pull_request_lookup: bool = True, log: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize with the GitHub client used to look up pull requests."""
        self.client = client
        self.strict_pull_request_lookup = strict_pull_request_lookup
        self.log = log or logger

    async def _pull_requests_for(self, commit: Commit) -> list[PullRef]:
        self.log.debug("Searching for pull requests associated with commit", sha=commit.sha)
        try:
            pull_requests = await self.client.list_pull_requests_for_commit(commit.sha)
        except LookupFailure as exc:
            if self.strict_pull_request_lookup:
                raise
            self.log.warning("Could not look up pull requests for commit, listing it without them", sha=commit.sha, error=str(exc))
            return []
        if pull_requests:
            self.log.info(f"Found {len(pull_requests)} pull request(s) associated with commit", sha=commit.sha)
        return pull_requests

    async def parse_commits(self, commits: list[Commit]) -> list[ParsedCommit]:
        """Attach pull requests to each commit and parse it, dropping merge commits."""
        parsed_commits: list[ParsedCommit] = []
        for commit in commits:
            pull_requests = await self._pull_requests_for(commit)
            parsed_commit = parse_commit(commit.with_pull_requests(pull_requests))
            if parsed_commit is None:
                self.log.debug("Ignoring merge commit", sha=commit.sha)
                continue
            parsed_commits.append(parsed_commit)
            self.log.info("Adding commit to the changelog", header=parsed_commit.header, breaking=parsed_commit.breaking)
        return parsed_commits

    async def generate(self, commits: list[Commit]) -> str:
        """Generate the markdown changelog for the given commits."""
        parsed_commits = await self.parse_commits(commits)
        changelog = render_changelog(parsed_commits)
        self.log.debug("Generated changelog", commits=len(commits), entries=len(parsed_commits), changelog=changelog)
        return changelog
