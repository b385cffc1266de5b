"""Unit tests for release tag resolution."""

from unittest.mock import MagicMock

import pytest

from automatic_releases.changelog.models import Tag
from automatic_releases.release.exceptions import InvalidVersionError, MissingReleaseTagError
from automatic_releases.release.tags import ReleaseTagResolver, determine_release_tag, find_previous_tag


def _tags(*names: str) -> list[Tag]:
    return [Tag.from_name(name) for name in names]


def test_find_previous_tag_skips_higher_pre_release() -> None:
    """Test that the closest lower version is chosen, ignoring higher pre-releases."""
    assert find_previous_tag("v1.1.0", _tags("v1.0.0", "v1.1.0", "v2.0.0-rc.1")) == "v1.0.0"


def test_find_previous_tag_ignores_invalid_tags() -> None:
    """Test that tags which are not semantic versions are never returned."""
    assert find_previous_tag("v2.0.0", _tags("latest", "nightly", "v1.9.9", "release-1.9.10")) == "v1.9.9"


def test_find_previous_tag_first_release() -> None:
    """Test that an empty string is returned when no lower version exists."""
    assert find_previous_tag("v1.0.0", _tags("latest", "v1.0.0", "v1.0.1")) == ""
    assert find_previous_tag("v1.0.0", []) == ""


def test_find_previous_tag_pre_release_precedes_release() -> None:
    """Test that a release's own pre-release counts as its previous tag."""
    assert find_previous_tag("v2.0.0", _tags("v1.0.0", "v2.0.0-rc.1", "v2.0.0-rc.2")) == "v2.0.0-rc.2"


def test_find_previous_tag_invalid_current_tag() -> None:
    """Test that a current tag which is not a semantic version is fatal."""
    with pytest.raises(InvalidVersionError) as exc_info:
        find_previous_tag("latest", _tags("v1.0.0"))
    assert exc_info.value.tag == "latest"
    assert "semantic versioning" in str(exc_info.value)


def test_determine_release_tag() -> None:
    """Test that the automatic release tag wins over the triggering ref."""
    assert determine_release_tag("latest", "refs/tags/v1.0.0") == "latest"
    assert determine_release_tag(None, "refs/tags/v1.0.0") == "v1.0.0"


def test_determine_release_tag_missing() -> None:
    """Test that a run triggered by a branch without an automatic tag is fatal."""
    with pytest.raises(MissingReleaseTagError) as exc_info:
        determine_release_tag(None, "refs/heads/main")
    assert "(Event: refs/heads/main)" in str(exc_info.value)


@pytest.mark.asyncio
async def test_resolve_semantic_version_tag(github_client: MagicMock) -> None:
    """Test that a tag push resolves its previous release from the repository tags."""
    github_client.list_tags.return_value = _tags("v1.0.0", "v1.1.0", "v2.0.0-rc.1")
    tags = await ReleaseTagResolver(github_client).resolve(None, "refs/tags/v1.1.0")
    assert tags.current == "v1.1.0"
    assert tags.previous == "v1.0.0"


@pytest.mark.asyncio
async def test_resolve_floating_automatic_release_tag_is_its_own_previous_tag(github_client: MagicMock) -> None:
    """Test that a non-semver automatic tag covers the commits since it last moved, without listing tags."""
    tags = await ReleaseTagResolver(github_client).resolve("latest", "refs/heads/main")
    assert tags.current == "latest"
    assert tags.previous == "latest"
    github_client.list_tags.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_semantic_version_automatic_release_tag(github_client: MagicMock) -> None:
    """Test that a semver automatic tag resolves its previous release from the repository tags."""
    github_client.list_tags.return_value = _tags("v1.0.0", "v1.1.0")
    tags = await ReleaseTagResolver(github_client).resolve("v2.0.0", "refs/heads/main")
    assert tags.current == "v2.0.0"
    assert tags.previous == "v1.1.0"
    github_client.list_tags.assert_awaited_once()


@pytest.mark.asyncio
async def test_resolve_semantic_version_automatic_release_tag_first_release(github_client: MagicMock) -> None:
    """Test that a semver automatic tag with no lower tag is treated as the first release."""
    github_client.list_tags.return_value = _tags("latest", "v2.0.0")
    tags = await ReleaseTagResolver(github_client).resolve("v2.0.0", "refs/heads/main")
    assert tags.current == "v2.0.0"
    assert tags.previous == ""


@pytest.mark.asyncio
async def test_resolve_invalid_tag_push(github_client: MagicMock) -> None:
    """Test that pushing a non-semver tag without an automatic tag is fatal."""
    with pytest.raises(InvalidVersionError):
        await ReleaseTagResolver(github_client).resolve(None, "refs/tags/nightly")
    github_client.list_tags.assert_not_awaited()
