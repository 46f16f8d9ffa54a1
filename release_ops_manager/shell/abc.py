"""Base ABC for command executors."""

from abc import ABC, abstractmethod


class ShellBase(ABC):
    """Base ABC for command executors."""

    @abstractmethod
    async def exec(self, command: str | list[str], dry_run: bool | None = None, dry_run_result: str = "") -> str:
        """Run a command and return its standard output.

        Args:
            command: Command line string or argument list.
            dry_run: Overrides the executor's own dry-run setting when not None.
            dry_run_result: Output returned instead of running the command in dry-run mode.
        """
        pass
