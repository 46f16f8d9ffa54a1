"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from release_ops_manager.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_client(github_pat_token: str | None, github_api_url: str) -> GitHubClient:
    """Returns a GitHub client authenticated with a personal access token.

    Supports a custom base URL for GitHub Enterprise Server (GHES).

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no token is configured.
    """
    if not github_pat_token:
        raise GitHubAuthenticationConfigurationUndefinedError("GitHub PAT authentication requires GITHUB_PAT_TOKEN to be set.")
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)
