"""Unit tests for the changelog generator."""

from typing import Callable
from unittest.mock import MagicMock

import pytest

from automatic_releases.changelog.generator import ChangelogGenerator, parse_commit
from automatic_releases.changelog.models import Commit, PullRef
from automatic_releases.release.exceptions import LookupFailure


def test_parse_commit_scenario_breaking_feature(make_commit: Callable[..., Commit]) -> None:
    """Test that a feature with a breaking change footer is classified as breaking."""
    parsed = parse_commit(make_commit("feat(api): add endpoint\n\nBREAKING CHANGE: removes old field"))
    assert parsed is not None
    assert parsed.type == "feat"
    assert parsed.scope == "api"
    assert parsed.breaking is True


def test_parse_commit_breaking_indicator(make_commit: Callable[..., Commit]) -> None:
    """Test that the '!' header indicator marks a commit as breaking."""
    parsed = parse_commit(make_commit("fix!: reject invalid tags"))
    assert parsed is not None
    assert parsed.breaking is True


def test_parse_commit_excludes_merges(make_commit: Callable[..., Commit]) -> None:
    """Test that merge commits are dropped."""
    assert parse_commit(make_commit("Merge pull request #42 from x/y")) is None


def test_parse_commit_keeps_pull_requests(make_commit: Callable[..., Commit]) -> None:
    """Test that the pull requests attached to a commit are carried over."""
    pull_requests = [PullRef(number=7, url="https://github.com/owner/repo/pull/7")]
    parsed = parse_commit(make_commit("docs: usage").with_pull_requests(pull_requests))
    assert parsed is not None
    assert parsed.pull_requests == tuple(pull_requests)


@pytest.mark.asyncio
async def test_generate_excludes_merge_commits(github_client: MagicMock, make_commit: Callable[..., Commit]) -> None:
    """Test that merge commits never show up in the changelog."""
    commits = [make_commit("Merge pull request #42 from x/y", sha="1111111aaa"), make_commit("fix: crash", sha="2222222bbb")]
    changelog = await ChangelogGenerator(github_client).generate(commits)
    assert "Merge pull request" not in changelog
    assert changelog == "## Bug Fixes\n- crash ([octocat](https://github.com/owner/repo/commit/2222222bbb))"


@pytest.mark.asyncio
async def test_generate_looks_up_pull_requests_in_commit_order(github_client: MagicMock, make_commit: Callable[..., Commit]) -> None:
    """Test that pull requests are looked up one commit at a time, in order, and linked."""
    github_client.list_pull_requests_for_commit.side_effect = [
        [PullRef(number=3, url="https://github.com/owner/repo/pull/3")],
        [],
    ]
    commits = [make_commit("feat: first", sha="aaaaaaa111"), make_commit("feat: second", sha="bbbbbbb222")]
    changelog = await ChangelogGenerator(github_client).generate(commits)
    assert [call.args[0] for call in github_client.list_pull_requests_for_commit.await_args_list] == ["aaaaaaa111", "bbbbbbb222"]
    assert changelog == (
        "## Features\n"
        "- first [#3](https://github.com/owner/repo/pull/3) ([octocat](https://github.com/owner/repo/commit/aaaaaaa111))\n"
        "- second ([octocat](https://github.com/owner/repo/commit/bbbbbbb222))"
    )


@pytest.mark.asyncio
async def test_generate_is_deterministic(github_client: MagicMock, make_commit: Callable[..., Commit]) -> None:
    """Test that identical commits and pull requests yield identical markdown."""
    commits = [
        make_commit("feat(cli): add flag", sha="aaaaaaa111"),
        make_commit("Update docs", sha="bbbbbbb222"),
        make_commit("perf!: faster tag search", sha="ccccccc333"),
    ]
    generator = ChangelogGenerator(github_client)
    assert await generator.generate(commits) == await generator.generate(list(commits))


@pytest.mark.asyncio
async def test_generate_empty(github_client: MagicMock) -> None:
    """Test that no commits produce an empty changelog."""
    assert await ChangelogGenerator(github_client).generate([]) == ""
    github_client.list_pull_requests_for_commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_generate_strict_pull_request_lookup_failure_aborts(github_client: MagicMock, make_commit: Callable[..., Commit]) -> None:
    """Test that a failed pull request lookup aborts generation by default."""
    github_client.list_pull_requests_for_commit.side_effect = LookupFailure("pull requests of commit aaaaaaa111", "Server Error")
    with pytest.raises(LookupFailure):
        await ChangelogGenerator(github_client).generate([make_commit("feat: first", sha="aaaaaaa111")])


@pytest.mark.asyncio
async def test_generate_tolerant_pull_request_lookup_failure(github_client: MagicMock, make_commit: Callable[..., Commit]) -> None:
    """Test that a tolerant generator lists the commit without pull requests and warns."""
    log = MagicMock()
    github_client.list_pull_requests_for_commit.side_effect = [
        LookupFailure("pull requests of commit aaaaaaa111", "Server Error"),
        [PullRef(number=9, url="https://github.com/owner/repo/pull/9")],
    ]
    commits = [make_commit("feat: first", sha="aaaaaaa111"), make_commit("feat: second", sha="bbbbbbb222")]
    changelog = await ChangelogGenerator(github_client, strict_pull_request_lookup=False, log=log).generate(commits)
    assert changelog == (
        "## Features\n"
        "- first ([octocat](https://github.com/owner/repo/commit/aaaaaaa111))\n"
        "- second [#9](https://github.com/owner/repo/pull/9) ([octocat](https://github.com/owner/repo/commit/bbbbbbb222))"
    )
    log.warning.assert_called_once()
    assert log.warning.call_args.kwargs["sha"] == "aaaaaaa111"
