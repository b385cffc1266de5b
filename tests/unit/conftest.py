"""Fixtures for unit tests."""

from typing import Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from automatic_releases.changelog.models import Commit
from automatic_releases.github.abc import GitHubClientBase


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def github_client() -> MagicMock:
    """A GitHub client whose every operation is an AsyncMock."""
    client = MagicMock(spec=GitHubClientBase)
    for name in GitHubClientBase.__abstractmethods__:
        setattr(client, name, AsyncMock())
    client.list_pull_requests_for_commit.return_value = []
    return client


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for commits with a predictable SHA, author and URL."""

    def _make_commit(message: str, sha: str = "a1b2c3d4e5f6", author: str | None = "octocat") -> Commit:
        return Commit(sha=sha, message=message, author=author, html_url=f"https://github.com/owner/repo/commit/{sha}")

    return _make_commit
