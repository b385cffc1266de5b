"""Data models for changelog generation."""

from pydantic import BaseModel, ConfigDict

from automatic_releases.changelog.versions import clean as clean_version
from automatic_releases.utils.constants import SHORT_SHA_LENGTH


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Tag(_FrozenModel):
    """A repository tag and the semantic version derived from its name."""

    name: str
    semver: str | None = None

    @classmethod
    def from_name(cls, name: str) -> "Tag":
        """Build a tag, deriving its semantic version (None when the name is not one)."""
        return cls(name=name, semver=clean_version(name))


class PullRef(_FrozenModel):
    """A pull request associated with a commit."""

    number: int
    url: str


class Commit(_FrozenModel):
    """A commit between the previous release and the current one."""

    sha: str
    message: str
    author: str | None = None
    html_url: str | None = None
    pull_requests: tuple[PullRef, ...] = ()

    @property
    def short_sha(self) -> str:
        """The abbreviated SHA shown in the changelog."""
        return self.sha[:SHORT_SHA_LENGTH]

    def with_pull_requests(self, pull_requests: list[PullRef]) -> "Commit":
        """Return a copy of the commit with its associated pull requests attached."""
        return self.model_copy(update={"pull_requests": tuple(pull_requests)})


class Note(_FrozenModel):
    """A footer note such as 'BREAKING CHANGE: removes old field'."""

    title: str
    text: str


class FooterToken(_FrozenModel):
    """A single 'Token: value' or 'Token #value' entry of a commit footer."""

    token: str
    separator: str
    value: str


class Revert(_FrozenModel):
    """The commit undone by a revert commit."""

    header: str
    sha: str


class ParsedMessage(_FrozenModel):
    """Structured representation of a raw commit message."""

    header: str | None = None
    body: str | None = None
    footer: str | None = None
    type: str | None = None
    scope: str | None = None
    subject: str | None = None
    merge: str | None = None
    breaking_indicator: bool = False
    notes: tuple[Note, ...] = ()
    footer_tokens: tuple[FooterToken, ...] = ()
    revert: Revert | None = None


class ParsedCommit(_FrozenModel):
    """A commit enriched with its parsed message, breaking flag and pull requests."""

    header: str | None
    body: str | None
    footer: str | None
    type: str | None
    scope: str | None
    subject: str | None
    breaking: bool
    pull_requests: tuple[PullRef, ...]
    commit: Commit


class ChangelogSection(_FrozenModel):
    """A titled group of changelog entries."""

    title: str
    entries: tuple[str, ...]
