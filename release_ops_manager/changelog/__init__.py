"""Changelog generation from commit history."""

from .formatter import ChangelogFormatter, format_link, format_scope
from .history import CommitHistoryReader, GitLogOptions, get_range
from .parser import CommitParser, tabify
from .tags import TagResolver

__all__ = [
    "ChangelogFormatter",
    "CommitHistoryReader",
    "CommitParser",
    "GitLogOptions",
    "TagResolver",
    "format_link",
    "format_scope",
    "get_range",
    "tabify",
]
