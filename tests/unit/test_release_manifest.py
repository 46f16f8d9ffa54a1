"""Unit tests for reading package manifests."""

import json
from pathlib import Path

import pytest

from release_ops_manager.release.manifest import JsonManifestReader
from release_ops_manager.release.exceptions import ManifestError


def write_manifest(root: Path, path: str, content: str) -> None:
    """Write a manifest file below the root."""
    directory = root / path
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(content, encoding="utf-8")


def test_to_package(tmp_path: Path) -> None:
    """Test building a package record from its manifest."""
    write_manifest(tmp_path, "packages/ui", json.dumps({"name": "@scope/ui", "version": "1.0.0", "private": True}))

    package = JsonManifestReader(tmp_path).to_package("packages/ui")

    assert package.name == "@scope/ui"
    assert package.version == "1.0.0"
    assert package.path == "packages/ui"
    assert package.changelog is None


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("{not json", id="invalid json"),
        pytest.param(json.dumps({"name": "a"}), id="no version"),
        pytest.param(json.dumps({"version": "1.0.0"}), id="no name"),
        pytest.param(json.dumps(["a", "1.0.0"]), id="not an object"),
    ],
)
def test_invalid_manifest(tmp_path: Path, content: str) -> None:
    """Test that unusable manifests raise a manifest error."""
    write_manifest(tmp_path, "pkg", content)
    with pytest.raises(ManifestError):
        JsonManifestReader(tmp_path).read("pkg")


def test_missing_manifest(tmp_path: Path) -> None:
    """Test that a missing manifest raises a manifest error."""
    with pytest.raises(ManifestError, match="Failed to read manifest"):
        JsonManifestReader(tmp_path).read("missing")
