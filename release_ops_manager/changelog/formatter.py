"""Renders parsed commits into markdown changelog lines."""

from typing import Any

import structlog

from release_ops_manager.configuration.models import TypeConfig
from release_ops_manager.schemas.commits import CommitValue
from release_ops_manager.utils.constants import ABBREV_HASH_LENGTH, DEFAULT_COMMIT_TEMPLATE
from release_ops_manager.utils.templates import format_template

logger = structlog.get_logger(__name__)


def format_link(text: str, url: str | None = None) -> str:
    """Format a markdown link wrapped in parentheses, or just `(text)` without a URL."""
    return f"([{text}]({url}))" if url else f"({text})"


def format_scope(scope: str) -> str:
    """Format a commit scope as a bold markdown header."""
    return f"**{scope}:**"


def body_lines(body: str | None) -> list[str]:
    """Split an indented commit body into lines, dropping blank leading and trailing lines."""
    if not body:
        return []
    lines = body.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


class ChangelogFormatter:
    """Groups commits by type and renders one line per commit."""

    def __init__(
        self,
        repo_url: str | None = None,
        format_template: str = DEFAULT_COMMIT_TEMPLATE,
        include_body: bool = True,
    ) -> None:
        self.repo_url = repo_url
        self.format_template = format_template
        self.include_body = include_body

    def commit_link(self, commit: CommitValue) -> str:
        """Return the abbreviated hash link for a commit, or an empty string without a hash."""
        commit_hash = commit.base.hash
        if not commit_hash:
            return ""
        url = f"{self.repo_url}/commit/{commit_hash}" if self.repo_url else None
        return format_link(commit_hash[:ABBREV_HASH_LENGTH], url)

    def pr_link(self, commit: CommitValue) -> str:
        """Return the pull request link for a commit, or an empty string without a PR number."""
        if not commit.pr_number:
            return ""
        url = f"{self.repo_url}/pull/{commit.pr_number}" if self.repo_url else None
        return format_link(f"#{commit.pr_number}", url)

    def format_commit(self, commit: CommitValue, template: str | None = None) -> str:
        """Render one commit through the commit template.

        The template sees the commit's fields (`base`, `commitlint`, `prNumber`)
        plus `scopeHeader`, `commitLink` and `prLink`.
        """
        scope = commit.commitlint.scope
        context: dict[str, Any] = {
            **commit.template_context(),
            "scopeHeader": format_scope(scope) if scope else "",
            "commitLink": self.commit_link(commit),
            "prLink": self.pr_link(commit),
        }
        return format_template(
            self.format_template if template is None else template,
            context,
            name="Changelog commit",
        )

    def format(self, commits: list[CommitValue], types: list[TypeConfig]) -> list[str]:
        """Render commits grouped into the sections configured by `types`.

        Args:
            commits: Parsed commits in log order.
            types: Ordered allow-list of commit types. Hidden entries are skipped.

        Returns:
            The changelog lines. Commits whose type is not listed are omitted.
        """
        buckets: dict[str, list[CommitValue]] = {}
        for commit in commits:
            key = commit.commitlint.type or commit.commitlint.message
            buckets.setdefault(key, []).append(commit)

        lines: list[str] = []
        for type_config in types:
            if type_config.hidden:
                continue
            bucket = buckets.get(type_config.type, [])
            if not bucket:
                continue

            lines.append(type_config.section or "")
            for commit in bucket:
                lines.append(self.format_commit(commit))
                if self.include_body:
                    lines.extend(body_lines(commit.commitlint.body))

        logger.debug("Formatted changelog", commit_count=len(commits), line_count=len(lines))
        return lines
