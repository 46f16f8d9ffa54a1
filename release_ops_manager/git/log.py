"""Commit log source reading records from `git log`."""

import structlog

from release_ops_manager.schemas.commits import RawCommit
from release_ops_manager.shell.abc import ShellBase
from release_ops_manager.utils.constants import GIT_LOG_MAX_COMMITS

logger = structlog.get_logger(__name__)

RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"

COMMIT_FIELD_FORMATS: dict[str, str] = {
    "hash": "%H",
    "abbrevHash": "%h",
    "treeHash": "%T",
    "abbrevTreeHash": "%t",
    "parentHashes": "%P",
    "abbrevParentHashes": "%p",
    "authorName": "%an",
    "authorEmail": "%ae",
    "authorDate": "%ai",
    "authorDateRel": "%ar",
    "committerName": "%cn",
    "committerEmail": "%ce",
    "committerDate": "%ci",
    "committerDateRel": "%cr",
    "subject": "%s",
    "body": "%b",
    "rawBody": "%B",
}
"""Supported commit fields and their `git log --format` placeholders."""

DEFAULT_COMMIT_FIELDS = ["hash", "abbrevHash", "subject", "rawBody", "body"]


def build_log_format(fields: list[str]) -> str:
    """Build a `git log --format` string for the requested fields."""
    unknown = [name for name in fields if name not in COMMIT_FIELD_FORMATS]
    if unknown:
        raise ValueError(f"Unsupported commit field(s): {', '.join(unknown)}")
    return "%x1e" + "%x1f".join(COMMIT_FIELD_FORMATS[name] for name in fields)


def parse_log_output(output: str, fields: list[str]) -> list[RawCommit]:
    """Parse `git log` output produced with `build_log_format` into raw commits."""
    commits: list[RawCommit] = []
    for record in output.split(RECORD_SEPARATOR):
        if not record.strip():
            continue
        values = record.split(FIELD_SEPARATOR)
        data: dict[str, str] = {}
        for name, value in zip(fields, values, strict=False):
            data[name] = value.rstrip("\n") if name in ("body", "rawBody") else value.strip()
        commits.append(RawCommit.model_validate(data))
    return commits


class GitLogSource:
    """Queries commit records from the repository through the command executor."""

    def __init__(self, shell: ShellBase) -> None:
        """Initialize with the executor used to run `git log`."""
        self.shell = shell

    async def query(
        self,
        range: str,
        path: str | None = None,
        fields: list[str] | None = None,
        include_merges: bool = False,
        number: int = GIT_LOG_MAX_COMMITS,
    ) -> list[RawCommit]:
        """Return up to `number` commits in `range`, newest first.

        Args:
            range: Revision range such as 'v1.0.0..HEAD' or a single ref.
            path: Restrict the history to this path when given.
            fields: Extra commit fields to read in addition to the defaults.
            include_merges: Include merge commits when True.
            number: Maximum number of commits to return.
        """
        requested = list(DEFAULT_COMMIT_FIELDS)
        for name in fields or []:
            if name not in requested:
                requested.append(name)

        command = ["git", "log", f"--max-count={number}", f"--format={build_log_format(requested)}"]
        if not include_merges:
            command.append("--no-merges")
        command.append(range)
        if path:
            command.extend(["--", path])

        output = await self.shell.exec(command, dry_run=False)
        commits = parse_log_output(output, requested)
        logger.debug("Read commits from git log", range=range, path=path, count=len(commits))
        return commits
