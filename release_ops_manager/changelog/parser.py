"""Parses conventional commit titles into structured fields.

A title is read with the grammar::

    header := [type ["(" scope ")"] ": "] message

where `type` is one or more ASCII letters and `scope` is the shortest text
followed by `"): "` and a non-empty remainder. A title that does not fit the
prefix is kept whole as the message.
"""

import string

from release_ops_manager.schemas.commits import CommitValue, ParsedCommit, RawCommit
from release_ops_manager.utils.constants import (
    ABBREV_HASH_LENGTH,
    DEFAULT_TABIFY_SIZE,
    PR_NUMBER_PATTERN,
    PR_SUFFIX_PATTERN,
)

TYPE_CHARACTERS = frozenset(string.ascii_letters)
SCOPE_OPEN = "("
SCOPE_CLOSE = "): "
TYPE_SEPARATOR = ": "


def tabify(body: str, size: int = DEFAULT_TABIFY_SIZE) -> str:
    """Trim every line of `body` and indent it with `size` spaces.

    Blank lines are indented too, so "a\\n\\nb" becomes "  a\\n  \\n  b".
    """
    indent = " " * size
    return "\n".join(indent + line.strip() for line in body.split("\n"))


def first_line(text: str) -> str:
    """Return the first line of the stripped text."""
    return text.strip().split("\n")[0]


def extract_pr_number(title: str) -> str | None:
    """Return the number of the first `(#N)` marker in the title, if any."""
    match = PR_NUMBER_PATTERN.search(title)
    return match.group(1) if match else None


def parse_header(title: str) -> tuple[str | None, str | None, str] | None:
    """Split a single-line title into (type, scope, message).

    Returns:
        The raw, untrimmed parts, or None when the title is empty.
    """
    if not title:
        return None

    type_end = 0
    while type_end < len(title) and title[type_end] in TYPE_CHARACTERS:
        type_end += 1
    if type_end == 0:
        return None, None, title

    commit_type = title[:type_end]
    rest = title[type_end:]

    if rest.startswith(TYPE_SEPARATOR) and len(rest) > len(TYPE_SEPARATOR):
        return commit_type, None, rest[len(TYPE_SEPARATOR) :]

    if rest.startswith(SCOPE_OPEN):
        # Any later closing marker leaves a shorter remainder, so only the first one can match.
        scope_end = rest.find(SCOPE_CLOSE, len(SCOPE_OPEN))
        if scope_end != -1 and len(rest) > scope_end + len(SCOPE_CLOSE):
            return commit_type, rest[len(SCOPE_OPEN) : scope_end], rest[scope_end + len(SCOPE_CLOSE) :]

    return None, None, title


class CommitParser:
    """Turns commit subjects and bodies into parsed commits."""

    def __init__(self, tabify_size: int = DEFAULT_TABIFY_SIZE) -> None:
        self.tabify_size = tabify_size

    def parse(self, subject: str, raw_body: str = "") -> ParsedCommit:
        """Parse a commit subject and its raw body.

        Args:
            subject: Commit subject. Only its first non-blank line is used as the title.
            raw_body: Full commit message. A leading copy of the title is dropped
                before the remainder is used as the body. The title is matched as
                written, with any trailing `(#N)` marker, so a message that starts
                with the full subject never leaks the marker into the body.

        Returns:
            The parsed commit. `type` is lower-cased and `scope` trimmed when present.
        """
        title = first_line(subject)
        body_text = raw_body[len(title) :] if raw_body.startswith(title) else raw_body
        body = tabify(body_text, self.tabify_size) if body_text else None

        header = parse_header(PR_SUFFIX_PATTERN.sub("", title))
        if header is None:
            return ParsedCommit(message=title, body=body)

        commit_type, scope, message = header
        return ParsedCommit(
            type=commit_type.lower() if commit_type is not None else None,
            scope=scope.strip() if scope is not None else None,
            message=message.strip(),
            body=body,
        )

    def to_commit_value(self, hash: str, message: str) -> CommitValue:
        """Build a commit value from a bare hash and full commit message.

        Used for commits that do not come from the log source, such as the
        commits of a pull request.
        """
        title = first_line(message)
        base = RawCommit(
            hash=hash,
            abbrev_hash=hash[:ABBREV_HASH_LENGTH],
            subject=title,
            raw_body=message,
            body=title,
        )
        return CommitValue(
            base=base,
            commitlint=self.parse(title, message),
            pr_number=extract_pr_number(title),
        )
