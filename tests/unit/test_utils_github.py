"""Contains unit tests for the utils.github module."""

import pytest

from automatic_releases.utils.github import parse_git_tag, split_repository


def test_split_repository_valid() -> None:
    """Test splitting a valid owner/repo string."""
    owner, repo = split_repository("octocat/Hello-World")
    assert owner == "octocat"
    assert repo == "Hello-World"


def test_split_repository_missing() -> None:
    """Test that ValueError is raised if repo is None."""
    with pytest.raises(ValueError, match="owner/repo"):
        split_repository(None)


@pytest.mark.parametrize(
    "malformed_repo",
    [
        pytest.param("", id="empty string"),
        pytest.param("/", id="only a slash"),
        pytest.param("octocat-HelloWorld", id="no slash"),
        pytest.param("owner/repo/extra", id="too many parts"),
    ],
)
def test_split_repository_various_malformed(malformed_repo: str) -> None:
    """Test that ValueError is raised if repo is malformed (various cases)."""
    with pytest.raises(ValueError):
        split_repository(malformed_repo)


@pytest.mark.parametrize(
    "ref,expected",
    [
        pytest.param("refs/tags/v1.0.0", "v1.0.0", id="full tag ref"),
        pytest.param("tags/latest", "latest", id="short tag ref"),
        pytest.param("refs/tags/release/2024", "release/2024", id="tag with slash"),
        pytest.param("refs/heads/main", "", id="branch ref"),
        pytest.param("refs/tags/", "", id="empty tag name"),
        pytest.param(None, "", id="no ref"),
    ],
)
def test_parse_git_tag(ref: str | None, expected: str) -> None:
    """Test extracting the tag name from a git ref."""
    assert parse_git_tag(ref) == expected
