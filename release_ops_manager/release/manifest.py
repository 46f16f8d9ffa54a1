"""Reads package manifests to obtain a package's name and version."""

import json
from pathlib import Path

import structlog

from release_ops_manager.release.exceptions import ManifestError
from release_ops_manager.schemas.release import PackageRelease
from release_ops_manager.utils.constants import MANIFEST_PATH

logger = structlog.get_logger(__name__)


class JsonManifestReader:
    """Reads `package.json` manifests below a repository root."""

    def __init__(self, root: Path | str = ".", manifest_name: str = MANIFEST_PATH) -> None:
        self.root = Path(root)
        self.manifest_name = manifest_name

    def read(self, path: str) -> dict[str, str]:
        """Return the `name` and `version` of the package at `path`.

        Raises:
            ManifestError: If the manifest is missing, invalid, or lacks a name or version.
        """
        manifest_path = self.root / path / self.manifest_name
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ManifestError(f"Failed to read manifest {manifest_path}: {exc}") from exc

        name = data.get("name") if isinstance(data, dict) else None
        version = data.get("version") if isinstance(data, dict) else None
        if not name or not version:
            raise ManifestError(f"Manifest {manifest_path} must define both 'name' and 'version'")
        logger.debug("Read package manifest", path=str(manifest_path), name=name, version=version)
        return {"name": str(name), "version": str(version)}

    def to_package(self, path: str) -> PackageRelease:
        """Build a package release record for the package at `path`."""
        manifest = self.read(path)
        return PackageRelease(name=manifest["name"], version=manifest["version"], path=path)
