"""Custom exceptions for the shell module."""


class ShellCommandError(Exception):
    """Raised when a command exits with a non-zero return code."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        """Initializes the exception with the failed command and its output."""
        super().__init__(f"Command '{command}' failed with exit code {returncode}: {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
