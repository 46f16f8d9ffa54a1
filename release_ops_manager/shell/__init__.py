"""Command execution layer used for version control queries and tooling."""

from .abc import ShellBase
from .exceptions import ShellCommandError
from .executor import AsyncShell

__all__ = ["AsyncShell", "ShellBase", "ShellCommandError"]
