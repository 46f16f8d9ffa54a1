"""Derives release names, tags, branches and pull request text.

Every name is rendered from a `${...}` template so that single-package and
batch releases follow the same rules. A batch is any release of more than one
package.
"""

import time
from collections.abc import Mapping
from typing import Any

import structlog

from release_ops_manager.configuration.exceptions import TemplateConfigurationError
from release_ops_manager.configuration.models import ReleaseParamsConfig
from release_ops_manager.schemas.release import PackageRelease, ReleaseBranchParams
from release_ops_manager.utils.constants import BATCH_PR_BODY, DEFAULT_BRANCH_NAME
from release_ops_manager.utils.templates import format_template

logger = structlog.get_logger(__name__)


def current_timestamp() -> int:
    """Return the current epoch time in milliseconds."""
    return int(time.time() * 1000)


class ReleaseParams:
    """Release naming rules for a set of packages released together."""

    def __init__(self, config: ReleaseParamsConfig | None = None) -> None:
        self.config = config or ReleaseParamsConfig()

    def workspace_label(self, package: PackageRelease) -> str:
        """Return `name@version` using the configured separator."""
        return f"{package.name}{self.config.workspace_version_separator}{package.version}"

    def release_name(self, packages: list[PackageRelease]) -> str:
        """Return the release name.

        One package yields its name. Several yield the first `max_workspace`
        packages as `name@version` joined by the multi-workspace separator.
        """
        if len(packages) == 1:
            return packages[0].name
        selected = packages[: self.config.max_workspace]
        return self.config.multi_workspace_separator.join(self.workspace_label(package) for package in selected)

    def release_tag_name(self, packages: list[PackageRelease]) -> str:
        """Return the package version for one package, or the rendered batch tag for several."""
        if len(packages) == 1:
            return packages[0].version
        return format_template(
            self.config.batch_tag_name,
            {"length": len(packages), "timestamp": current_timestamp()},
            name="Batch tag name",
        )

    def release_branch_name(self, release_name: str, tag_name: str, shared: Mapping[str, Any]) -> str:
        """Render the branch name of a single-package release.

        Args:
            release_name: Name returned by `release_name`.
            tag_name: Tag returned by `release_tag_name`.
            shared: Shared template context. Its `branchName` entry is the template
                and its keys override the computed variables.

        Raises:
            TemplateConfigurationError: If the branch name template is not a string.
        """
        template = shared.get("branchName") or DEFAULT_BRANCH_NAME
        if not isinstance(template, str):
            raise TemplateConfigurationError("Branch name", template)
        logger.debug("Rendering release branch name", template=template)
        return format_template(
            template,
            {"pkgName": release_name, "releaseName": release_name, "tagName": tag_name, **shared},
            name="Branch name",
        )

    def batch_release_branch_name(
        self, release_name: str, tag_name: str, shared: Mapping[str, Any], length: int
    ) -> str:
        """Render the branch name of a batch release.

        Raises:
            TemplateConfigurationError: If the batch branch name template is not a string.
        """
        template = self.config.batch_branch_name
        if not isinstance(template, str):
            raise TemplateConfigurationError("Batch branch name", template)
        logger.debug("Rendering batch release branch name", template=template)
        return format_template(
            template,
            {
                "pkgName": release_name,
                "releaseName": release_name,
                "tagName": tag_name,
                **shared,
                "length": length,
                "timestamp": current_timestamp(),
            },
            name="Batch branch name",
        )

    def branch_params(self, packages: list[PackageRelease], shared: Mapping[str, Any]) -> ReleaseBranchParams:
        """Compute the tag and branch of a release."""
        tag_name = self.release_tag_name(packages)
        release_name = self.release_name(packages)
        if len(packages) > 1:
            branch = self.batch_release_branch_name(release_name, tag_name, shared, len(packages))
        else:
            branch = self.release_branch_name(release_name, tag_name, shared)
        return ReleaseBranchParams(tag_name=tag_name, release_branch=branch)

    def pr_title(self, branch_params: ReleaseBranchParams, context: Mapping[str, Any]) -> str:
        """Render the pull request title. `pkgName` is the release branch."""
        return format_template(
            self.config.pr_title,
            {**context, "tagName": branch_params.tag_name, "pkgName": branch_params.release_branch},
            name="PR title",
        )

    def pr_body(
        self, packages: list[PackageRelease], branch_params: ReleaseBranchParams, context: Mapping[str, Any]
    ) -> str:
        """Render the pull request body.

        A single package contributes its changelog as is. For a batch every
        package is rendered through a per-package block and `tagName` lists
        all `name@version` pairs.
        """
        if len(packages) > 1:
            changelog = "\n".join(format_template(BATCH_PR_BODY, package, name="Batch PR body") for package in packages)
            tag_name = " ".join(self.workspace_label(package) for package in packages)
        else:
            changelog = packages[0].changelog or ""
            tag_name = branch_params.tag_name

        return format_template(
            self.config.pr_body,
            {**context, "tagName": tag_name, "changelog": changelog},
            name="PR body",
        )

    def commit_message(self, packages: list[PackageRelease]) -> str:
        """Render the message of the commit carrying the version bump."""
        if len(packages) == 1:
            return format_template(self.config.commit_message, packages[0], name="Commit message")
        summary = ",".join(f"{package.name} v{package.version}" for package in packages)
        return f"chore(tag): {summary}"
