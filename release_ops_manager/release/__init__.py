"""Release preparation: naming, changesets, version bump and pull requests."""

from .bump import ChangesetsVersionBumper
from .changeset import ChangesetWriter, get_increment
from .exceptions import ChangesetRootNotFoundError, ManifestError
from .manifest import JsonManifestReader
from .naming import ReleaseParams
from .pipeline import ReleasePipeline
from .pull_request import create_release_pull_request, push_release_branch

__all__ = [
    "ChangesetRootNotFoundError",
    "ChangesetWriter",
    "ChangesetsVersionBumper",
    "JsonManifestReader",
    "ManifestError",
    "ReleaseParams",
    "ReleasePipeline",
    "create_release_pull_request",
    "get_increment",
    "push_release_branch",
]
