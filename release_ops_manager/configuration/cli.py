"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from release_ops_manager.changelog.formatter import ChangelogFormatter
from release_ops_manager.changelog.history import CommitHistoryReader, GitLogOptions
from release_ops_manager.changelog.parser import CommitParser
from release_ops_manager.changelog.tags import TagResolver
from release_ops_manager.configuration.env import Settings
from release_ops_manager.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    ReleaseConfigurationError,
    TemplateConfigurationError,
)
from release_ops_manager.configuration.models import ReleaseConfig
from release_ops_manager.git.log import GitLogSource
from release_ops_manager.github.adapter import GitHubKitAdapter
from release_ops_manager.release.exceptions import ChangesetRootNotFoundError, ManifestError
from release_ops_manager.release.manifest import JsonManifestReader
from release_ops_manager.release.naming import ReleaseParams
from release_ops_manager.release.pipeline import ReleasePipeline
from release_ops_manager.release.pull_request import create_release_pull_request, push_release_branch
from release_ops_manager.shell.exceptions import ShellCommandError
from release_ops_manager.shell.executor import AsyncShell
from release_ops_manager.utils.constants import DEFAULT_BASE_BRANCH
from release_ops_manager.utils.github import repository_url
from release_ops_manager.utils.yaml import load_release_config

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)

CLI_ERRORS = (
    ReleaseConfigurationError,
    TemplateConfigurationError,
    GitHubAuthenticationConfigurationUndefinedError,
    ShellCommandError,
    ChangesetRootNotFoundError,
    ManifestError,
    ValueError,
)


def configure_logging(debug: bool) -> None:
    """Send structlog output to stderr so command output on stdout stays clean."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_config(config_path: Path | None, repo: str | None) -> ReleaseConfig:
    """Load the release configuration and derive the repository URL from `repo` when unset."""
    settings = Settings()
    config = load_release_config(config_path or settings.RELEASE_CONFIG_PATH)
    repo = repo or settings.REPO
    if config.repo_url is None and repo:
        config.repo_url = repository_url(repo)
    return config


@typer_app.command(name="parse-commit")
def parse_commit_cli(
    subject: Annotated[str, Argument(help="Commit subject, e.g. 'feat(ui): add button (#12)'.")],
    body: Annotated[str, Option("--body", help="Full commit message (raw body).")] = "",
) -> None:
    """Parse a conventional commit title and print its fields."""
    parsed = CommitParser().parse(subject, body)
    typer.echo(f"type: {parsed.type or ''}")
    typer.echo(f"scope: {parsed.scope or ''}")
    typer.echo(f"message: {parsed.message}")
    if parsed.body:
        typer.echo("body:")
        typer.echo(parsed.body)


@typer_app.command(name="changelog")
def changelog_cli(
    from_tag: Annotated[str | None, Option("--from", help="Tag to start from. Defaults to the root commit.")] = None,
    to_ref: Annotated[str | None, Option("--to", help="Tag to stop at. Defaults to HEAD.")] = None,
    directory: Annotated[str | None, Option("--directory", help="Only include commits touching this path.")] = None,
    config_path: Annotated[Path | None, Option("--config", envvar="RELEASE_CONFIG_PATH", help="Path to the release configuration YAML.")] = None,
    repo: Annotated[str | None, Option(envvar="REPO", help="Repository name (owner/repo) used for links.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Print the changelog of the commits between two refs."""
    configure_logging(debug)
    try:
        config = load_config(config_path, repo)
    except CLI_ERRORS as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    shell = AsyncShell()
    parser = CommitParser(tabify_size=config.changelog.tabify_size)
    reader = CommitHistoryReader(TagResolver(shell), GitLogSource(shell), parser)
    formatter = ChangelogFormatter(
        repo_url=config.repo_url,
        format_template=config.changelog.format_template,
        include_body=config.changelog.include_body,
    )

    async def build_changelog() -> list[str]:
        commits = await reader.get_commits(
            GitLogOptions(from_=from_tag, to=to_ref, directory=directory, no_merges=config.changelog.no_merges)
        )
        return formatter.format(commits, config.changelog.types)

    try:
        lines = asyncio.run(build_changelog())
    except CLI_ERRORS as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    typer.echo("\n".join(lines))


@typer_app.command(name="release")
def release_cli(
    package_paths: Annotated[list[str], Argument(help="One or more package directories (relative to the repository root).")],
    config_path: Annotated[Path | None, Option("--config", envvar="RELEASE_CONFIG_PATH", help="Path to the release configuration YAML.")] = None,
    dry_run: Annotated[bool, Option("--dry-run", envvar="DRY_RUN", help="Log intended changes instead of applying them.")] = False,
    changed_paths: Annotated[
        list[str] | None,
        Option("--changed-path", help="Changed file path; package directories without changes are restored. Repeatable."),
    ] = None,
    create_pr: Annotated[bool, Option("--create-pr", help="Push a release branch and open a pull request.")] = False,
    base: Annotated[str, Option("--base", help="Branch the release pull request targets.")] = DEFAULT_BASE_BRANCH,
    repo: Annotated[str | None, Option(envvar="REPO", help="Repository name (owner/repo).")] = None,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Prepare a release of the given packages and print its tag, branch and pull request text."""
    configure_logging(debug)
    try:
        config = load_config(config_path, repo)
    except CLI_ERRORS as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    needs_github = create_pr or config.changelog.merge_pr_commits
    if needs_github and not repo:
        typer.echo("Error: --repo (or REPO) is required to talk to GitHub.", err=True)
        raise typer.Exit(1)

    async def run_release() -> None:
        shell = AsyncShell(dry_run=dry_run)
        manifest_reader = JsonManifestReader()
        packages = [manifest_reader.to_package(path) for path in package_paths]

        github = None
        if needs_github and repo:
            github = await GitHubKitAdapter.create(repo=repo, github_pat_token=github_pat_token, github_api_url=github_api_url)

        pipeline = ReleasePipeline(config, shell, dry_run=dry_run, github=github, manifest_reader=manifest_reader)
        released = await pipeline.run(packages, changed_paths=changed_paths)

        params = ReleaseParams(config.release)
        branch_params = params.branch_params(released, config.shared_context())
        context = dict(config.template_context)
        title = params.pr_title(branch_params, context)
        body = params.pr_body(released, branch_params, context)

        typer.echo(f"Tag: {branch_params.tag_name}")
        typer.echo(f"Branch: {branch_params.release_branch}")
        for package in released:
            typer.echo(f"Package: {package.name} {package.version} (last tag: {package.last_tag}, tag: {package.tag_name})")
        typer.echo(f"Title: {title}")
        typer.echo("Body:")
        typer.echo(body)

        if create_pr and github is not None:
            await push_release_branch(shell, branch_params, params.commit_message(released))
            number = await create_release_pull_request(
                github, params, released, branch_params, context, base=base, label=config.label, dry_run=dry_run
            )
            if number is not None:
                typer.echo(f"Created pull request #{number}")

    try:
        asyncio.run(run_release())
    except CLI_ERRORS as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


if __name__ == "__main__":
    typer_app()
