"""Reads commit history between two refs and parses it into commit values."""

from dataclasses import dataclass

import structlog

from release_ops_manager.changelog.parser import CommitParser, extract_pr_number, first_line
from release_ops_manager.changelog.tags import TagResolver
from release_ops_manager.git.log import GitLogSource
from release_ops_manager.schemas.commits import CommitValue, RawCommit
from release_ops_manager.utils.constants import GIT_LOG_MAX_COMMITS, HEAD_REF, ROOT_FALLBACK

logger = structlog.get_logger(__name__)


@dataclass
class GitLogOptions:
    """Options for reading a slice of commit history."""

    from_: str | None = None
    to: str | None = None
    directory: str | None = None
    no_merges: bool = True
    fields: list[str] | None = None


def get_range(from_: str, to: str) -> str:
    """Return the revision range between two refs, or the single ref when they are equal."""
    return to if from_ == to else f"{from_}..{to}"


class CommitHistoryReader:
    """Reads raw commits from the log source and parses their titles."""

    def __init__(
        self,
        tag_resolver: TagResolver,
        log_source: GitLogSource,
        parser: CommitParser | None = None,
    ) -> None:
        self.tag_resolver = tag_resolver
        self.log_source = log_source
        self.parser = parser or CommitParser()

    async def get_git_log(self, options: GitLogOptions | None = None) -> list[RawCommit]:
        """Return raw commits between `options.from_` and `options.to`.

        A missing `from_` tag falls back to the root commit and a missing `to`
        tag falls back to HEAD. Log source errors are propagated.
        """
        options = options or GitLogOptions()
        from_ref = await self.tag_resolver.resolve(options.from_, ROOT_FALLBACK)
        to_ref = await self.tag_resolver.resolve(options.to, HEAD_REF)
        revision_range = get_range(from_ref, to_ref)

        commits = await self.log_source.query(
            revision_range,
            path=options.directory,
            fields=options.fields,
            include_merges=not options.no_merges,
            number=GIT_LOG_MAX_COMMITS,
        )
        logger.debug(
            "Read commit history",
            range=revision_range,
            directory=options.directory,
            commit_count=len(commits),
        )
        return commits

    async def get_commits(self, options: GitLogOptions | None = None) -> list[CommitValue]:
        """Return parsed commits between two refs, newest first."""
        raw_commits = await self.get_git_log(options)
        return [
            CommitValue(
                base=commit,
                commitlint=self.parser.parse(commit.subject, commit.raw_body),
                pr_number=extract_pr_number(first_line(commit.subject)),
            )
            for commit in raw_commits
        ]
