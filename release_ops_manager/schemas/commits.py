"""Pydantic models for commits read from version control."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TemplateModel(BaseModel):
    """Base model whose dump uses the camelCase names templates refer to."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def template_context(self) -> dict[str, object]:
        """Return the aliased dump used as a template context."""
        return self.model_dump(by_alias=True)


class RawCommit(TemplateModel):
    """One commit record as produced by the commit log source.

    Extra log fields (author, dates, ...) requested from the log source are
    kept as additional attributes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow")

    hash: str = ""
    abbrev_hash: str = ""
    subject: str = ""
    raw_body: str = ""
    body: str | None = None


class ParsedCommit(TemplateModel):
    """Structured fields of a conventional commit title (a.k.a. commitlint)."""

    type: str | None = None
    scope: str | None = None
    message: str
    body: str | None = None


class CommitValue(TemplateModel):
    """A raw commit together with its parsed fields."""

    base: RawCommit
    commitlint: ParsedCommit
    commits: list[CommitValue] = Field(default_factory=list)
    pr_number: str | None = None
