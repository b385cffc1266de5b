"""GitHub client adapter for the githubkit library.

The adapter converts githubkit response models into the typed records used by
the changelog and release code, and githubkit's ``RequestFailed`` into the
errors of :mod:`automatic_releases.release.exceptions`.
"""

import re
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import CommitComparison, GitRef, PullRequestSimple, Release
from githubkit.versions.latest.models import Commit as GitHubCommit
from githubkit.versions.latest.models import Tag as GitHubTag

from automatic_releases.changelog.models import Commit, PullRef, Tag
from automatic_releases.release.exceptions import ComparisonFailure, LookupFailure, ReleaseApiError
from automatic_releases.release.models import CreatedRelease, RefFound, RefLookup, RefNotFound
from automatic_releases.utils.constants import ASSET_CONTENT_TYPE
from automatic_releases.utils.github import split_repository
from automatic_releases.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

UPLOAD_URL_TEMPLATE_PATTERN = re.compile(r"\{[^}]*\}$")


def _error_message(exc: RequestFailed) -> str:
    """Extract GitHub's error message (and validation errors) from a failed response."""
    try:
        error_data = exc.response.json()
    except Exception:
        error_data = {}
    if not isinstance(error_data, dict):
        error_data = {}
    message = error_data.get("message") or str(exc)
    errors = error_data.get("errors")
    return f"{message} | errors: {errors}" if errors else message


def raise_release_api_error(func: F) -> F:
    """Decorator converting failed GitHub requests into ReleaseApiError, logging the details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            message = _error_message(exc)
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                message=message,
                url=str(getattr(exc.response, "url", "")),
                status_code=exc.response.status_code,
            )
            raise ReleaseApiError(func.__name__, message, status_code=exc.response.status_code) from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    def create(cls, repo: str, repo_token: str, github_api_url: str = "https://api.github.com") -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            repo_token: Token used to authenticate against the repository
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
            RuntimeError: If no token is provided
        """
        owner, repo_name = split_repository(repo)
        logger.info("Creating client for GitHub instance and repository", github_api_url=github_api_url, owner=owner, repo_name=repo_name)
        return cls(get_github_client(repo_token, github_api_url), owner, repo_name)

    # Repository references
    @retry_on_rate_limit()
    async def _list_tags_page(self, page: int, per_page: int) -> list[GitHubTag]:
        response: Response[list[GitHubTag]] = await self.client.rest.repos.async_list_tags(
            owner=self.owner,
            repo=self.repo_name,
            per_page=per_page,
            page=page,
        )
        return response.parsed_data

    async def list_tags(self, per_page: int = 100) -> list[Tag]:
        """List all tags for the repository, handling pagination."""
        all_tags: list[Tag] = []
        page: int = 1
        while True:
            logger.debug(f"Fetching tags page {page}")
            tags = await self._list_tags_page(page, per_page)
            if not tags:
                break
            all_tags.extend(Tag.from_name(tag.name) for tag in tags)
            if len(tags) < per_page:
                break
            page += 1
        logger.debug(f"Total tags found: {len(all_tags)}")
        return all_tags

    @retry_on_rate_limit()
    async def _get_ref(self, ref: str) -> GitRef:
        response: Response[GitRef] = await self.client.rest.git.async_get_ref(owner=self.owner, repo=self.repo_name, ref=ref)
        return response.parsed_data

    async def get_ref(self, ref: str) -> RefLookup:
        """Look up a git reference, returning RefNotFound instead of raising when it cannot be resolved."""
        try:
            git_ref = await self._get_ref(ref)
        except RequestFailed as exc:
            return RefNotFound(ref=ref, reason=_error_message(exc))
        return RefFound(ref=git_ref.ref, sha=git_ref.object_.sha)

    @retry_on_rate_limit()
    async def _compare_commits_page(self, base: str, head: str, page: int, per_page: int) -> CommitComparison:
        response: Response[CommitComparison] = await self.client.rest.repos.async_compare_commits(
            owner=self.owner,
            repo=self.repo_name,
            basehead=f"{base}...{head}",
            page=page,
            per_page=per_page,
        )
        return response.parsed_data

    @staticmethod
    def _to_commit(commit: GitHubCommit) -> Commit:
        author = commit.commit.author.name if commit.commit.author else None
        return Commit(sha=commit.sha, message=commit.commit.message, author=author, html_url=commit.html_url)

    async def compare_commits(self, base: str, head: str, per_page: int = 100) -> list[Commit]:
        """List the commits between base and head in the order GitHub returns them (oldest first)."""
        commits: list[Commit] = []
        page: int = 1
        while True:
            try:
                comparison = await self._compare_commits_page(base, head, page, per_page)
            except RequestFailed as exc:
                raise ComparisonFailure(base, head, _error_message(exc)) from exc
            commits.extend(self._to_commit(commit) for commit in comparison.commits)
            if len(comparison.commits) < per_page or len(commits) >= comparison.total_commits:
                break
            page += 1
        return commits

    @retry_on_rate_limit()
    async def _list_pull_requests_for_commit(self, sha: str) -> list[PullRequestSimple]:
        response: Response[list[PullRequestSimple]] = await self.client.rest.repos.async_list_pull_requests_associated_with_commit(
            owner=self.owner,
            repo=self.repo_name,
            commit_sha=sha,
        )
        return response.parsed_data

    async def list_pull_requests_for_commit(self, sha: str) -> list[PullRef]:
        """List the pull requests associated with a commit."""
        try:
            pulls = await self._list_pull_requests_for_commit(sha)
        except RequestFailed as exc:
            raise LookupFailure(f"pull requests of commit {sha}", _error_message(exc)) from exc
        return [PullRef(number=pr.number, url=pr.html_url) for pr in pulls]

    # Release/Tag Operations
    @raise_release_api_error
    @retry_on_rate_limit()
    async def create_ref(self, ref: str, sha: str) -> None:
        """Create a git reference such as 'refs/tags/latest'."""
        await self.client.rest.git.async_create_ref(owner=self.owner, repo=self.repo_name, ref=ref, sha=sha)

    @raise_release_api_error
    @retry_on_rate_limit()
    async def update_ref(self, ref: str, sha: str, force: bool = False) -> None:
        """Move an existing git reference such as 'tags/latest' to a commit."""
        await self.client.rest.git.async_update_ref(owner=self.owner, repo=self.repo_name, ref=ref, sha=sha, force=force)

    @staticmethod
    def _to_release(release: Release) -> CreatedRelease:
        return CreatedRelease(id=release.id, upload_url=release.upload_url, html_url=release.html_url, tag_name=release.tag_name)

    @raise_release_api_error
    @retry_on_rate_limit()
    async def _get_release_by_tag(self, tag: str) -> Release | None:
        try:
            response: Response[Release] = await self.client.rest.repos.async_get_release_by_tag(owner=self.owner, repo=self.repo_name, tag=tag)
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return response.parsed_data

    async def get_release_by_tag(self, tag: str) -> CreatedRelease | None:
        """Get the release for a tag, or None when the tag has no release."""
        release = await self._get_release_by_tag(tag)
        return self._to_release(release) if release is not None else None

    @raise_release_api_error
    @retry_on_rate_limit()
    async def delete_release(self, release_id: int) -> None:
        """Delete a release."""
        await self.client.rest.repos.async_delete_release(owner=self.owner, repo=self.repo_name, release_id=release_id)

    @raise_release_api_error
    @retry_on_rate_limit()
    async def create_release(
        self,
        tag_name: str,
        name: str,
        body: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> CreatedRelease:
        """Create a release for a tag."""
        response: Response[Release] = await self.client.rest.repos.async_create_release(
            owner=self.owner,
            repo=self.repo_name,
            tag_name=tag_name,
            name=name,
            body=body,
            draft=draft,
            prerelease=prerelease,
        )
        return self._to_release(response.parsed_data)

    @raise_release_api_error
    @retry_on_rate_limit()
    async def upload_release_asset(self, upload_url: str, name: str, content: bytes) -> None:
        """Upload a file to the release's upload URL (e.g. https://uploads.github.com/...{?name,label})."""
        url = UPLOAD_URL_TEMPLATE_PATTERN.sub("", upload_url)
        await self.client.arequest(
            "POST",
            url,
            params={"name": name},
            content=content,
            headers={"Content-Type": ASSET_CONTENT_TYPE, "Content-Length": str(len(content))},
        )
