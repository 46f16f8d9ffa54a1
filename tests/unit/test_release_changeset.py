"""Unit tests for changeset files."""

from pathlib import Path

import pytest

from release_ops_manager.release.changeset import ChangesetWriter, changeset_file_name, get_increment
from release_ops_manager.release.exceptions import ChangesetRootNotFoundError
from release_ops_manager.schemas.release import PackageRelease


@pytest.fixture
def package() -> PackageRelease:
    """Return a scoped package with a changelog."""
    return PackageRelease(name="@scope/ui", version="1.2.3", path="packages/ui", changelog="### Features\n- x")


@pytest.mark.parametrize(
    "labels,default,expected",
    [
        pytest.param(["increment:major", "increment:minor"], "patch", "major", id="major wins"),
        pytest.param(["increment:minor", "other"], "patch", "minor", id="minor"),
        pytest.param(["other"], "patch", "patch", id="default"),
        pytest.param(None, "minor", "minor", id="no labels"),
    ],
)
def test_get_increment(labels: list[str] | None, default: str, expected: str) -> None:
    """Test reading the increment from labels."""
    assert get_increment(labels, default) == expected


def test_changeset_file_name_replaces_separators(package: PackageRelease) -> None:
    """Test that path separators in package names are replaced."""
    assert changeset_file_name(package) == "@scope_ui-1.2.3.md"
    assert changeset_file_name(PackageRelease(name="a\\b", version="1", path=".")) == "a_b-1.md"


def test_render(package: PackageRelease) -> None:
    """Test the changeset content."""
    assert ChangesetWriter().render(package, "minor") == "---\n'@scope/ui': 'minor'\n---\n\n### Features\n- x"


def test_write_creates_file(tmp_path: Path, package: PackageRelease) -> None:
    """Test that a changeset is written into the changeset directory."""
    (tmp_path / ".changeset").mkdir()
    writer = ChangesetWriter(tmp_path)

    writer.ensure_root()
    path = writer.write(package, "patch")

    assert path == tmp_path / ".changeset" / "@scope_ui-1.2.3.md"
    assert path.read_text(encoding="utf-8") == "---\n'@scope/ui': 'patch'\n---\n\n### Features\n- x"


def test_write_keeps_existing_file(tmp_path: Path, package: PackageRelease) -> None:
    """Test that an existing changeset is not overwritten."""
    directory = tmp_path / "changes"
    directory.mkdir()
    existing = directory / "@scope_ui-1.2.3.md"
    existing.write_text("original", encoding="utf-8")

    assert ChangesetWriter(tmp_path, "changes").write(package, "major") is None
    assert existing.read_text(encoding="utf-8") == "original"


def test_missing_root_raises(tmp_path: Path) -> None:
    """Test that a missing changeset directory is an error."""
    with pytest.raises(ChangesetRootNotFoundError, match="does not exist"):
        ChangesetWriter(tmp_path).ensure_root()


def test_dry_run_writes_nothing(tmp_path: Path, package: PackageRelease) -> None:
    """Test that dry-run mode neither checks the directory nor writes files."""
    writer = ChangesetWriter(tmp_path, dry_run=True)
    writer.ensure_root()
    assert writer.write(package, "patch") is None
    assert not (tmp_path / ".changeset").exists()
