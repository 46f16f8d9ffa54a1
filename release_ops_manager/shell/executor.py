"""Asynchronous command executor backed by asyncio subprocesses."""

import asyncio
import shlex
from pathlib import Path

import structlog

from .abc import ShellBase
from .exceptions import ShellCommandError

logger = structlog.get_logger(__name__)


class AsyncShell(ShellBase):
    """Runs commands in a working directory, honouring a dry-run flag."""

    def __init__(self, cwd: Path | str = ".", dry_run: bool = False) -> None:
        """Initialize the executor with a working directory and default dry-run mode."""
        self.cwd = Path(cwd)
        self.dry_run = dry_run

    async def exec(self, command: str | list[str], dry_run: bool | None = None, dry_run_result: str = "") -> str:
        """Run a command and return its decoded standard output.

        Raises:
            ShellCommandError: If the command exits with a non-zero return code.
        """
        command_line = command if isinstance(command, str) else shlex.join(command)
        is_dry_run = self.dry_run if dry_run is None else dry_run

        if is_dry_run:
            logger.info("Dry run - command not executed", command=command_line)
            return dry_run_result

        logger.debug("Executing command", command=command_line, cwd=str(self.cwd))
        if isinstance(command, str):
            process = await asyncio.create_subprocess_shell(
                command,
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        else:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        stdout, stderr = await process.communicate()
        output = stdout.decode("utf-8", errors="replace")

        if process.returncode != 0:
            error_output = stderr.decode("utf-8", errors="replace")
            logger.error("Command failed", command=command_line, returncode=process.returncode, stderr=error_output.strip())
            raise ShellCommandError(command_line, process.returncode or 0, error_output)

        return output
