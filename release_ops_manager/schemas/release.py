"""Pydantic models for packages taking part in a release."""

from release_ops_manager.schemas.commits import TemplateModel


class PackageRelease(TemplateModel):
    """A package (workspace) being released.

    Created with name, version and path; enriched with `last_tag` and
    `changelog` during changelog generation, then with a refreshed `version`
    and `tag_name` after the version bump.
    """

    name: str
    version: str
    path: str
    last_tag: str | None = None
    tag_name: str | None = None
    changelog: str | None = None


class ReleaseBranchParams(TemplateModel):
    """Tag and branch computed once per release run."""

    tag_name: str
    release_branch: str
