"""Base ABC for the GitHub services consumed while generating a release."""

from abc import ABC, abstractmethod

from automatic_releases.changelog.models import Commit, PullRef, Tag
from automatic_releases.release.models import CreatedRelease, RefLookup


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients."""

    # Repository references
    @abstractmethod
    async def list_tags(self) -> list[Tag]:
        """List every tag of the repository, across all pages."""
        pass

    @abstractmethod
    async def get_ref(self, ref: str) -> RefLookup:
        """Look up a git reference such as 'tags/v1.0.0'."""
        pass

    @abstractmethod
    async def compare_commits(self, base: str, head: str) -> list[Commit]:
        """List the commits reachable from head but not from base, oldest first.

        Raises ComparisonFailure when the references cannot be compared.
        """
        pass

    @abstractmethod
    async def list_pull_requests_for_commit(self, sha: str) -> list[PullRef]:
        """List the pull requests associated with a commit.

        Raises LookupFailure when the lookup fails.
        """
        pass

    # Release/Tag Operations
    @abstractmethod
    async def create_ref(self, ref: str, sha: str) -> None:
        """Create a git reference such as 'refs/tags/latest'."""
        pass

    @abstractmethod
    async def update_ref(self, ref: str, sha: str, force: bool = False) -> None:
        """Move an existing git reference such as 'tags/latest' to a commit."""
        pass

    @abstractmethod
    async def get_release_by_tag(self, tag: str) -> CreatedRelease | None:
        """Get the release for a tag, or None when there is none."""
        pass

    @abstractmethod
    async def delete_release(self, release_id: int) -> None:
        """Delete a release."""
        pass

    @abstractmethod
    async def create_release(
        self,
        tag_name: str,
        name: str,
        body: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> CreatedRelease:
        """Create a release for a tag."""
        pass

    @abstractmethod
    async def upload_release_asset(self, upload_url: str, name: str, content: bytes) -> None:
        """Upload a file as an asset of the release owning upload_url."""
        pass
