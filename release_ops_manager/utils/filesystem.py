"""Filesystem access used for writing release artifacts."""

from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class LocalFileSystem:
    """Reads and writes files on the local disk."""

    def exists(self, path: Path | str) -> bool:
        """Return True if the path exists."""
        return Path(path).exists()

    def write_file(self, path: Path | str, content: str) -> None:
        """Write text content to a file, replacing any existing content."""
        Path(path).write_text(content, encoding="utf-8")
        logger.debug("Wrote file", path=str(path), size=len(content))
