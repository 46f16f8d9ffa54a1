"""Contains utility functions for GitHub interactions."""

from release_ops_manager.utils.constants import GITHUB_DOMAIN


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository."""
    if repo is None:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def repository_url(repo: str, domain: str = GITHUB_DOMAIN) -> str:
    """Returns the web URL of a repository, used for commit and pull request links."""
    owner, repository = split_repository(repo)
    return "/".join([domain.rstrip("/"), owner, repository])
