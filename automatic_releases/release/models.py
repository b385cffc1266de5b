"""Data models for release generation."""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


class RefFound(BaseModel):
    """A git reference that exists in the repository."""

    model_config = ConfigDict(frozen=True)

    ref: str
    sha: str


class RefNotFound(BaseModel):
    """A git reference that does not exist in the repository."""

    model_config = ConfigDict(frozen=True)

    ref: str
    reason: str = ""


RefLookup = RefFound | RefNotFound


class ReleaseTagPair(NamedTuple):
    """The current release tag and the previous one ('' for the first release)."""

    current: str
    previous: str


class CreatedRelease(BaseModel):
    """A GitHub release as returned by the release service."""

    model_config = ConfigDict(frozen=True)

    id: int
    upload_url: str
    html_url: str | None = None
    tag_name: str | None = None


class AssetUpload(BaseModel):
    """Outcome of uploading one release artifact."""

    path: str
    name: str
    uploaded: bool
    error: str | None = None


class ReleaseResult(BaseModel):
    """Result of an automatic release run."""

    release_tag: str
    previous_tag: str
    release_id: int
    upload_url: str
    changelog: str
    html_url: str | None = None
    assets: list[AssetUpload] = []
