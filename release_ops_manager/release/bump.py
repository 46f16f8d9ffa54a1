"""Runs the external version bump tool once per release."""

import structlog

from release_ops_manager.shell.abc import ShellBase
from release_ops_manager.utils.constants import DEFAULT_VERSION_BUMP_COMMAND

logger = structlog.get_logger(__name__)


class ChangesetsVersionBumper:
    """Applies pending changesets to package manifests with the changesets CLI."""

    def __init__(self, shell: ShellBase, command: str = DEFAULT_VERSION_BUMP_COMMAND) -> None:
        self.shell = shell
        self.command = command

    async def bump(self) -> None:
        """Run the version bump command. Dry-run mode only logs it."""
        logger.info("Bumping package versions", command=self.command)
        await self.shell.exec(self.command)
