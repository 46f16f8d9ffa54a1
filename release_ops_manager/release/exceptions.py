"""Custom exceptions for the release module."""


class ChangesetRootNotFoundError(Exception):
    """Raised when the changeset directory does not exist."""

    def __init__(self, path: str) -> None:
        """Initializes the exception with the missing directory."""
        super().__init__(f"Changeset directory {path} does not exist")
        self.path = path


class ManifestError(Exception):
    """Raised when a package manifest cannot be read or lacks a name or version."""

    pass
