"""Orchestrates changelog generation and version bumping for a set of packages.

Each package's changelog is generated concurrently. Once every package is
done, changesets are written one by one, the version bump tool runs once, and
the refreshed versions and tag names are read back from the manifests.
"""

from pathlib import Path

import structlog

from release_ops_manager.changelog.formatter import ChangelogFormatter
from release_ops_manager.changelog.history import CommitHistoryReader, GitLogOptions
from release_ops_manager.changelog.parser import CommitParser
from release_ops_manager.changelog.tags import TagResolver
from release_ops_manager.configuration.exceptions import TemplateConfigurationError
from release_ops_manager.configuration.models import ReleaseConfig
from release_ops_manager.git.log import GitLogSource
from release_ops_manager.github.abc import GitHubClientBase
from release_ops_manager.release.bump import ChangesetsVersionBumper
from release_ops_manager.release.changeset import ChangesetWriter, get_increment
from release_ops_manager.release.manifest import JsonManifestReader
from release_ops_manager.schemas.commits import CommitValue
from release_ops_manager.schemas.release import PackageRelease
from release_ops_manager.shell.abc import ShellBase
from release_ops_manager.utils.concurrency import gather_or_fail
from release_ops_manager.utils.constants import FALLBACK_TAG_SUFFIX, HEAD_REF
from release_ops_manager.utils.templates import format_template

logger = structlog.get_logger(__name__)


def fallback_tag(package: PackageRelease) -> str:
    """Return the deterministic tag used when a package's tag cannot be determined."""
    return f"{package.name}{FALLBACK_TAG_SUFFIX}"


def contains_path(directory: str, path: str) -> bool:
    """Return whether the path is the directory itself or lies below it."""
    directory = directory.rstrip("/")
    return path == directory or path.startswith(f"{directory}/")


def unchanged_directories(directories: list[str], changed_paths: list[str]) -> list[str]:
    """Return the directories that contain none of the changed paths."""
    return [directory for directory in directories if not any(contains_path(directory, path) for path in changed_paths)]


class ReleasePipeline:
    """Runs the release steps for a set of packages."""

    def __init__(
        self,
        config: ReleaseConfig,
        shell: ShellBase,
        root: Path | str = ".",
        dry_run: bool = False,
        github: GitHubClientBase | None = None,
        manifest_reader: JsonManifestReader | None = None,
        changeset_writer: ChangesetWriter | None = None,
        version_bumper: ChangesetsVersionBumper | None = None,
        history_reader: CommitHistoryReader | None = None,
    ) -> None:
        self.config = config
        self.shell = shell
        self.dry_run = dry_run
        self.github = github
        self.parser = CommitParser(tabify_size=config.changelog.tabify_size)
        self.formatter = ChangelogFormatter(
            repo_url=config.repo_url,
            format_template=config.changelog.format_template,
            include_body=config.changelog.include_body,
        )
        self.manifest_reader = manifest_reader or JsonManifestReader(root)
        self.changeset_writer = changeset_writer or ChangesetWriter(
            root, config.changelog.changeset_root, dry_run=dry_run
        )
        self.version_bumper = version_bumper or ChangesetsVersionBumper(shell)
        self.history_reader = history_reader or CommitHistoryReader(
            TagResolver(shell), GitLogSource(shell), self.parser
        )

    def tag_name(self, package: PackageRelease) -> str:
        """Render the tag of a package from the tag template, or its fallback tag on error."""
        try:
            return format_template(self.config.changelog.tag_template, package, name="Tag")
        except TemplateConfigurationError:
            logger.exception("Failed to render tag name", package=package.name)
            return fallback_tag(package)

    async def get_last_tag(self, package: PackageRelease) -> str:
        """Return the most recent tag of a package.

        A `last_tag` already set on the package is reused. Otherwise the newest
        tag matching the tag match template wins, or the package's own tag when
        nothing matches. Lookup errors fall back to `<name>-v0.0.0`.
        """
        if package.last_tag:
            logger.warning("Reusing last tag already set on package", package=package.name, tag=package.last_tag)
            return package.last_tag

        try:
            candidate = format_template(self.config.changelog.tag_template, package, name="Tag")
            tag_match = format_template(self.config.changelog.tag_match, package, name="Tag match")
            output = await self.shell.exec(
                [
                    "git",
                    "for-each-ref",
                    "--sort=-creatordate",
                    "--format=%(refname:short)|%(creatordate:iso8601)",
                    f"refs/tags/{tag_match}",
                ],
                dry_run=False,
            )
        except Exception:
            tag = fallback_tag(package)
            logger.exception("Failed to look up last tag, using fallback", package=package.name, tag=tag)
            return tag

        lines = [line for line in output.splitlines() if line.strip()]
        if not lines:
            logger.debug("No existing tags match, using package tag", package=package.name, tag=candidate)
            return candidate
        tag = lines[0].split("|")[0].strip()
        logger.debug("Resolved last tag", package=package.name, tag=tag)
        return tag

    async def expand_pull_request(self, commit: CommitValue) -> list[CommitValue]:
        """Replace a squashed pull request commit with the pull request's own commits."""
        if not commit.pr_number or self.github is None:
            return [commit]
        pr_commits = await self.github.list_pull_request_commits(int(commit.pr_number))
        return [
            self.parser.to_commit_value(item["sha"], item["commit"]["message"]).model_copy(
                update={"pr_number": commit.pr_number}
            )
            for item in pr_commits
        ]

    async def get_commits(self, package: PackageRelease, last_tag: str) -> list[CommitValue]:
        """Read the commits of a package since its last tag."""
        commits = await self.history_reader.get_commits(
            GitLogOptions(
                from_=last_tag,
                directory=package.path,
                no_merges=self.config.changelog.no_merges,
            )
        )
        if not self.config.changelog.merge_pr_commits or self.github is None:
            return commits

        expanded = await gather_or_fail(*(self.expand_pull_request(commit) for commit in commits))
        return [commit for group in expanded for commit in group]

    async def generate_changelog(self, package: PackageRelease) -> PackageRelease:
        """Return a copy of the package with its last tag and changelog filled in."""
        last_tag = await self.get_last_tag(package)
        commits = await self.get_commits(package, last_tag)
        lines = self.formatter.format(commits, self.config.changelog.types)
        logger.info("Generated changelog", package=package.name, last_tag=last_tag, commit_count=len(commits))
        return package.model_copy(update={"last_tag": last_tag, "changelog": "\n".join(lines)})

    async def generate_changelogs(self, packages: list[PackageRelease]) -> list[PackageRelease]:
        """Generate changelogs for all packages concurrently. The first failure aborts the batch."""
        return await gather_or_fail(*(self.generate_changelog(package) for package in packages))

    def write_changesets(self, packages: list[PackageRelease]) -> None:
        """Write one changeset per package."""
        self.changeset_writer.ensure_root()
        increment = get_increment(self.config.changelog.change_labels, self.config.changelog.increment)
        for package in packages:
            self.changeset_writer.write(package, increment)

    async def restore_unchanged(self, packages: list[PackageRelease], changed_paths: list[str]) -> list[str]:
        """Restore package directories without changes to their committed state.

        Returns:
            The restored directories.
        """
        directories = self.config.packages_directories or [package.path for package in packages]
        restored = unchanged_directories(directories, changed_paths)
        for directory in restored:
            logger.info("Restoring unchanged package directory", directory=directory)
            await self.shell.exec(["git", "restore", f"--source={HEAD_REF}", "--", directory])
        return restored

    def refresh(self, packages: list[PackageRelease]) -> list[PackageRelease]:
        """Re-read each manifest and recompute the package's version and tag name."""
        refreshed: list[PackageRelease] = []
        for package in packages:
            manifest = self.manifest_reader.read(package.path)
            updated = package.model_copy(update={"version": manifest["version"]})
            refreshed.append(updated.model_copy(update={"tag_name": self.tag_name(updated)}))
        return refreshed

    async def run(self, packages: list[PackageRelease], changed_paths: list[str] | None = None) -> list[PackageRelease]:
        """Run the release steps for the packages.

        Args:
            packages: Packages to release, in order.
            changed_paths: Paths changed by the release. When given, package
                directories without changes are restored after the version bump.

        Returns:
            The packages with changelog, last tag, refreshed version and tag name.
        """
        logger.info("Starting release", packages=[package.name for package in packages], dry_run=self.dry_run)
        generated = await self.generate_changelogs(packages)

        if self.config.changelog.skip_changeset:
            logger.debug("Skipping changeset files")
        else:
            self.write_changesets(generated)

        await self.version_bumper.bump()

        if changed_paths is not None:
            await self.restore_unchanged(generated, changed_paths)

        released = self.refresh(generated)
        logger.info("Release prepared", tags=[package.tag_name for package in released])
        return released
