"""Unit tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from release_ops_manager.configuration.cli import load_config, typer_app
from release_ops_manager.configuration.env import Settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove settings that would leak into the commands from the environment."""
    for name in ("REPO", "RELEASE_CONFIG_PATH", "DEBUG", "DRY_RUN", "GITHUB_PAT_TOKEN"):
        monkeypatch.delenv(name, raising=False)


def test_parse_commit() -> None:
    """Test printing the parsed fields of a commit title."""
    result = runner.invoke(typer_app, ["parse-commit", "feat(ui): add button (#12)"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["type: feat", "scope: ui", "message: add button"]


def test_parse_commit_with_body() -> None:
    """Test that the body is printed indented."""
    result = runner.invoke(typer_app, ["parse-commit", "fix: x", "--body", "fix: x\n\nMore detail"])
    assert result.exit_code == 0
    assert "body:\n  \n  \n  More detail" in result.output


def test_parse_commit_without_prefix() -> None:
    """Test a title without a conventional prefix."""
    result = runner.invoke(typer_app, ["parse-commit", "Update README"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["type: ", "scope: ", "message: Update README"]


def test_changelog_missing_config(tmp_path: Path) -> None:
    """Test that a missing configuration file exits with an error."""
    result = runner.invoke(typer_app, ["changelog", "--config", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
    assert "Error: Release configuration file not found" in result.output


def test_release_create_pr_requires_repo() -> None:
    """Test that creating a pull request without a repository is rejected."""
    result = runner.invoke(typer_app, ["release", "packages/a", "--create-pr"])
    assert result.exit_code == 1
    assert "--repo" in result.output


def test_load_config_sets_repo_url(tmp_path: Path) -> None:
    """Test that the repository URL is derived from the repository name."""
    config = load_config(None, "octocat/Hello-World")
    assert config.repo_url == "https://github.com/octocat/Hello-World"


def test_load_config_keeps_configured_repo_url(tmp_path: Path) -> None:
    """Test that a repository URL from the configuration file wins."""
    path = tmp_path / "release.yaml"
    path.write_text("repo_url: https://git.example.com/a/b\n", encoding="utf-8")
    assert load_config(path, "octocat/Hello-World").repo_url == "https://git.example.com/a/b"


def test_load_config_reads_settings_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the repository and configuration path fall back to the environment."""
    path = tmp_path / "release.yaml"
    path.write_text("label:\n  name: release\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REPO", "octocat/Hello-World")
    monkeypatch.setenv("RELEASE_CONFIG_PATH", str(path))

    config = load_config(None, None)

    assert config.repo_url == "https://github.com/octocat/Hello-World"
    assert config.label.name == "release"


def test_settings_only_hold_values_read_from_them() -> None:
    """Test that flags handled by the command options are not duplicated in the settings."""
    assert set(Settings.model_fields) == {"RELEASE_CONFIG_PATH", "REPO"}
