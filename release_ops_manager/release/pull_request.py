"""Publishes a prepared release as a branch and a GitHub pull request."""

from collections.abc import Mapping
from typing import Any

import structlog

from release_ops_manager.configuration.models import ReleaseLabelConfig
from release_ops_manager.github.abc import GitHubClientBase
from release_ops_manager.github.exceptions import GitHubUnprocessableEntityError
from release_ops_manager.release.naming import ReleaseParams
from release_ops_manager.schemas.release import PackageRelease, ReleaseBranchParams
from release_ops_manager.shell.abc import ShellBase

logger = structlog.get_logger(__name__)


async def push_release_branch(shell: ShellBase, branch_params: ReleaseBranchParams, commit_message: str) -> None:
    """Commit the working tree onto a new release branch and push it to origin.

    Each command honours the shell's dry-run mode.
    """
    branch = branch_params.release_branch
    logger.info("Pushing release branch", branch=branch, tag_name=branch_params.tag_name)
    await shell.exec(["git", "checkout", "-b", branch])
    await shell.exec(["git", "add", "."])
    await shell.exec(["git", "commit", "--message", commit_message])
    await shell.exec(["git", "push", "origin", branch])


async def ensure_release_label(github: GitHubClientBase, label: ReleaseLabelConfig, dry_run: bool = False) -> str:
    """Create the release label unless it already exists and return its name."""
    if dry_run:
        logger.info("Dry run - release label not created", label=label.name)
        return label.name
    try:
        await github.create_label(name=label.name, color=label.color.lstrip("#"), description=label.description)
        logger.info("Created release label", label=label.name)
    except GitHubUnprocessableEntityError:
        logger.warning("Release label already exists, skipping", label=label.name)
    return label.name


async def create_release_pull_request(
    github: GitHubClientBase,
    params: ReleaseParams,
    packages: list[PackageRelease],
    branch_params: ReleaseBranchParams,
    context: Mapping[str, Any],
    base: str,
    label: ReleaseLabelConfig | None = None,
    dry_run: bool = False,
) -> int | None:
    """Open the release pull request for the packages.

    Args:
        github: GitHub client used to create the label and the pull request.
        params: Naming rules used for the title and body.
        packages: Released packages, with their changelogs.
        branch_params: Tag and branch of the release.
        context: Template context for the title and body.
        base: Branch the pull request targets.
        label: Label attached to the pull request.
        dry_run: Only log the pull request when True.

    Returns:
        The pull request number, or None in dry-run mode.
    """
    label = label or ReleaseLabelConfig()
    label_name = await ensure_release_label(github, label, dry_run=dry_run)
    title = params.pr_title(branch_params, context)
    body = params.pr_body(packages, branch_params, context)

    if dry_run:
        logger.info(
            "Dry run - release pull request not created",
            title=title,
            head=branch_params.release_branch,
            base=base,
            labels=[label_name],
        )
        return None

    pull_request = await github.create_pull_request(title=title, head=branch_params.release_branch, base=base, body=body)
    await github.set_labels_on_issue(pull_request.number, [label_name])
    logger.info("Created release pull request", number=pull_request.number, head=branch_params.release_branch, base=base)
    return pull_request.number
