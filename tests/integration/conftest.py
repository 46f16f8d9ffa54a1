"""Pytest configuration for integration tests."""

import json
import os
import shutil
import subprocess
from pathlib import Path

import pytest

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Release Bot",
    "GIT_AUTHOR_EMAIL": "release-bot@example.com",
    "GIT_COMMITTER_NAME": "Release Bot",
    "GIT_COMMITTER_EMAIL": "release-bot@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def git(repo: Path, *args: str) -> str:
    """Run a git command in the repository and return its output."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
        env={**os.environ, **GIT_ENV, "HOME": str(repo)},
    )
    return result.stdout


def write_file(repo: Path, path: str, content: str) -> None:
    """Write a file below the repository, creating parent directories."""
    file_path = repo / path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")


def commit(repo: Path, message: str) -> None:
    """Stage everything and commit it with the message."""
    git(repo, "add", ".")
    git(repo, "commit", "--quiet", "--message", message)


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a repository with two packages, one tagged release and a few commits since.

    History, oldest first:
        chore: initial commit      (both packages, tagged a@1.0.0)
        feat(a): add widget (#5)   (packages/a, with a body)
        fix: patch b               (packages/b)
        docs(a): document widget   (packages/a)
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    for name, value in GIT_ENV.items():
        monkeypatch.setenv(name, value)
    for name in ("REPO", "RELEASE_CONFIG_PATH", "DEBUG", "DRY_RUN", "GITHUB_PAT_TOKEN"):
        monkeypatch.delenv(name, raising=False)

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "--quiet")

    write_file(repo, "packages/a/package.json", json.dumps({"name": "a", "version": "1.0.0"}))
    write_file(repo, "packages/b/package.json", json.dumps({"name": "b", "version": "1.0.0"}))
    write_file(repo, ".changeset/config.json", "{}")
    commit(repo, "chore: initial commit")
    git(repo, "tag", "a@1.0.0")

    write_file(repo, "packages/a/index.js", "export const widget = 1;\n")
    commit(repo, "feat(a): add widget (#5)\n\nAdds the widget.")

    write_file(repo, "packages/b/index.js", "export const b = 2;\n")
    commit(repo, "fix: patch b")

    write_file(repo, "packages/a/README.md", "# a\n")
    commit(repo, "docs(a): document widget")

    monkeypatch.chdir(repo)
    return repo
