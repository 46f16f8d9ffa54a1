"""Data models shared across the release workflow."""

from .commits import CommitValue, ParsedCommit, RawCommit, TemplateModel
from .release import PackageRelease, ReleaseBranchParams

__all__ = [
    "CommitValue",
    "PackageRelease",
    "ParsedCommit",
    "RawCommit",
    "ReleaseBranchParams",
    "TemplateModel",
]
