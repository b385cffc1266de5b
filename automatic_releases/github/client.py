# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


def get_github_client(repo_token: str, github_api_url: str) -> GitHubClient:
    """Returns a GitHub client authenticated with the workflow's repository token.

    Supports custom base URL for GitHub Enterprise Server (GHES).
    Raises RuntimeError if no token is provided.
    """
    if not repo_token:
        raise RuntimeError("GitHub authentication requires a repository token.")
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=TokenAuthStrategy(repo_token), base_url=github_api_url, http_cache=False)
