"""Writes changeset files recording each package's pending version increment."""

import re
from pathlib import Path

import structlog

from release_ops_manager.release.exceptions import ChangesetRootNotFoundError
from release_ops_manager.schemas.release import PackageRelease
from release_ops_manager.utils.constants import (
    CHANGESET_TEMPLATE,
    DEFAULT_CHANGESET_ROOT,
    DEFAULT_INCREMENT,
    INCREMENT_MAJOR_LABEL,
    INCREMENT_MINOR_LABEL,
)
from release_ops_manager.utils.filesystem import LocalFileSystem
from release_ops_manager.utils.templates import format_template

logger = structlog.get_logger(__name__)

PATH_SEPARATOR_PATTERN = re.compile(r"[/\\]")


def get_increment(labels: list[str] | None, default: str = DEFAULT_INCREMENT) -> str:
    """Return the version increment requested by pull request labels.

    `increment:major` wins over `increment:minor`; without either the default is used.
    """
    labels = labels or []
    if INCREMENT_MAJOR_LABEL in labels:
        return "major"
    if INCREMENT_MINOR_LABEL in labels:
        return "minor"
    return default


def changeset_file_name(package: PackageRelease) -> str:
    """Return the changeset file name of a package, with path separators replaced."""
    return PATH_SEPARATOR_PATTERN.sub("_", f"{package.name}-{package.version}") + ".md"


class ChangesetWriter:
    """Writes one changeset file per package into the changeset directory."""

    def __init__(
        self,
        root: Path | str = ".",
        changeset_root: str = DEFAULT_CHANGESET_ROOT,
        filesystem: LocalFileSystem | None = None,
        dry_run: bool = False,
    ) -> None:
        self.directory = Path(root) / changeset_root
        self.filesystem = filesystem or LocalFileSystem()
        self.dry_run = dry_run

    def ensure_root(self) -> None:
        """Check that the changeset directory exists.

        Raises:
            ChangesetRootNotFoundError: If the directory is missing outside dry-run mode.
        """
        if self.dry_run:
            return
        if not self.filesystem.exists(self.directory):
            raise ChangesetRootNotFoundError(str(self.directory))
        logger.debug("Changeset directory exists", path=str(self.directory))

    def render(self, package: PackageRelease, increment: str) -> str:
        """Render the changeset content of a package."""
        return format_template(
            CHANGESET_TEMPLATE,
            {**package.template_context(), "increment": increment},
            name="Changeset",
        )

    def write(self, package: PackageRelease, increment: str) -> Path | None:
        """Write the changeset of a package.

        Returns:
            The written file, or None when running dry or when the file already exists.
        """
        path = self.directory / changeset_file_name(package)
        content = self.render(package, increment)

        if self.dry_run:
            logger.info("Dry run - changeset not written", path=str(path), increment=increment, content=content)
            return None

        if self.filesystem.exists(path):
            logger.info("Changeset already exists", path=str(path))
            return None

        self.filesystem.write_file(path, content)
        logger.info("Wrote changeset", package=package.name, path=str(path), increment=increment)
        return path
