"""GitHub access used to open release pull requests and read pull request commits."""

from .abc import GitHubClientBase
from .adapter import GitHubKitAdapter, handle_github_422
from .exceptions import GitHubUnprocessableEntityError

__all__ = ["GitHubClientBase", "GitHubKitAdapter", "GitHubUnprocessableEntityError", "handle_github_422"]
