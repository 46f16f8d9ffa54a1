"""Pydantic models for release configuration loaded from YAML files and CLI arguments."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from release_ops_manager.utils.constants import (
    DEFAULT_BATCH_BRANCH_NAME,
    DEFAULT_BATCH_TAG_NAME,
    DEFAULT_BRANCH_NAME,
    DEFAULT_CHANGESET_ROOT,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_COMMIT_TEMPLATE,
    DEFAULT_INCREMENT,
    DEFAULT_PR_BODY,
    DEFAULT_PR_TITLE,
    DEFAULT_TAG_MATCH,
    DEFAULT_TAG_TEMPLATE,
    DEFAULT_TABIFY_SIZE,
    MAX_WORKSPACE,
    MULTI_WORKSPACE_SEPARATOR,
    RELEASE_LABEL_COLOR,
    RELEASE_LABEL_DESCRIPTION,
    RELEASE_LABEL_NAME,
    WORKSPACE_VERSION_SEPARATOR,
)


class TypeConfig(BaseModel):
    """One entry of the ordered commit type allow-list."""

    model_config = ConfigDict(extra="forbid")

    type: str
    section: str | None = None
    hidden: bool = False


def default_types() -> list[TypeConfig]:
    """Return the commit types rendered when no configuration is supplied."""
    return [
        TypeConfig(type="feat", section="### Features"),
        TypeConfig(type="fix", section="### Bug Fixes"),
        TypeConfig(type="perf", section="### Performance Improvements"),
        TypeConfig(type="refactor", section="### Code Refactoring"),
        TypeConfig(type="docs", section="### Documentation"),
        TypeConfig(type="chore", section="### Chores", hidden=True),
    ]


class ChangelogConfig(BaseModel):
    """Configuration for changelog generation and changeset files."""

    model_config = ConfigDict(extra="forbid")

    types: list[TypeConfig] = Field(default_factory=default_types)
    format_template: str = DEFAULT_COMMIT_TEMPLATE
    include_body: bool = True
    tabify_size: int = DEFAULT_TABIFY_SIZE
    no_merges: bool = True
    tag_template: str = DEFAULT_TAG_TEMPLATE
    tag_match: str = DEFAULT_TAG_MATCH
    increment: str = DEFAULT_INCREMENT
    change_labels: list[str] = Field(default_factory=list)
    skip_changeset: bool = False
    changeset_root: str = DEFAULT_CHANGESET_ROOT
    merge_pr_commits: bool = False


class ReleaseParamsConfig(BaseModel):
    """Configuration for release tag, branch and pull request naming."""

    model_config = ConfigDict(extra="forbid")

    max_workspace: int = MAX_WORKSPACE
    multi_workspace_separator: str = MULTI_WORKSPACE_SEPARATOR
    workspace_version_separator: str = WORKSPACE_VERSION_SEPARATOR
    branch_name: str = DEFAULT_BRANCH_NAME
    batch_branch_name: str = DEFAULT_BATCH_BRANCH_NAME
    batch_tag_name: str = DEFAULT_BATCH_TAG_NAME
    pr_title: str = DEFAULT_PR_TITLE
    pr_body: str = DEFAULT_PR_BODY
    commit_message: str = DEFAULT_COMMIT_MESSAGE


class ReleaseLabelConfig(BaseModel):
    """Label attached to release pull requests."""

    model_config = ConfigDict(extra="forbid")

    name: str = RELEASE_LABEL_NAME
    color: str = RELEASE_LABEL_COLOR
    description: str = RELEASE_LABEL_DESCRIPTION


class ReleaseConfig(BaseModel):
    """Top-level release configuration."""

    model_config = ConfigDict(extra="forbid")

    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    release: ReleaseParamsConfig = Field(default_factory=ReleaseParamsConfig)
    label: ReleaseLabelConfig = Field(default_factory=ReleaseLabelConfig)
    packages_directories: list[str] = Field(default_factory=list)
    repo_url: str | None = None
    template_context: dict[str, Any] = Field(default_factory=dict)

    def shared_context(self) -> dict[str, Any]:
        """Return the shared template context used for branch naming."""
        return {**self.template_context, "branchName": self.release.branch_name}
