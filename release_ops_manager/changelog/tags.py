"""Resolves optional tag names into refs usable in a revision range."""

import structlog

from release_ops_manager.shell.abc import ShellBase
from release_ops_manager.utils.constants import HEAD_REF, ROOT_FALLBACK

logger = structlog.get_logger(__name__)


class TagResolver:
    """Resolves a tag against the repository, applying a fallback when it is missing."""

    def __init__(self, shell: ShellBase) -> None:
        self.shell = shell

    async def tag_exists(self, tag: str) -> bool:
        """Return True if the tag exists. Errors from the check count as missing."""
        try:
            output = await self.shell.exec(["git", "tag", "--list", tag], dry_run=False)
        except Exception as exc:
            logger.debug("Tag existence check failed", tag=tag, error=str(exc))
            return False
        return bool(output.strip())

    async def root_commit(self) -> str:
        """Return the hash of the repository's first root commit."""
        output = await self.shell.exec(["git", "rev-list", "--max-parents=0", HEAD_REF], dry_run=False)
        lines = output.strip().splitlines()
        return lines[0].strip() if lines else ""

    async def resolve(self, tag: str | None = None, fallback: str | None = None) -> str:
        """Resolve a tag name to a ref.

        Args:
            tag: Tag to look up. Returned unchanged when it exists.
            fallback: "root" to fall back to the root commit; anything else falls back to HEAD.

        Returns:
            The existing tag, the root commit hash, or "HEAD".
        """
        if tag and await self.tag_exists(tag):
            return tag

        if fallback == ROOT_FALLBACK:
            root = await self.root_commit()
            logger.debug("Tag not found, using root commit", tag=tag, ref=root)
            return root

        logger.debug("Tag not found, using HEAD", tag=tag)
        return HEAD_REF
