"""Version control log access."""

from .log import GitLogSource

__all__ = ["GitLogSource"]
