"""Contains utilities for rendering `${dotted.path}` templates.

Templates are plain strings with `${...}` placeholders. Each placeholder holds
a dotted path that is looked up against a context of mappings, pydantic
models, or plain objects. Nothing inside a placeholder is evaluated.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel

from release_ops_manager.configuration.exceptions import TemplateConfigurationError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

PLACEHOLDER_START = "${"
PLACEHOLDER_END = "}"

_MISSING = object()


def _lookup_segment(value: Any, segment: str) -> Any:
    """Look up a single path segment on a mapping, model, or object."""
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)
    if segment.startswith("_"):
        return _MISSING
    return getattr(value, segment, _MISSING)


def resolve_path(context: Any, path: str) -> Any:
    """Resolve a dotted path against a context, returning None if any segment is missing."""
    value = context
    for segment in path.strip().split("."):
        if not segment:
            return None
        value = _lookup_segment(value, segment)
        if value is _MISSING or value is None:
            return None
    return value


def stringify(value: Any) -> str:
    """Render a resolved template value as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def split_template(template: str) -> list[tuple[str, bool]]:
    """Split a template into (text, is_placeholder) tokens.

    An opening `${` without a matching `}` is kept as literal text.
    """
    tokens: list[tuple[str, bool]] = []
    position = 0
    while True:
        start = template.find(PLACEHOLDER_START, position)
        if start == -1:
            break
        end = template.find(PLACEHOLDER_END, start + len(PLACEHOLDER_START))
        if end == -1:
            break
        if start > position:
            tokens.append((template[position:start], False))
        tokens.append((template[start + len(PLACEHOLDER_START) : end], True))
        position = end + len(PLACEHOLDER_END)
    if position < len(template):
        tokens.append((template[position:], False))
    return tokens


def format_template(template: Any, context: Mapping[str, Any] | BaseModel | None = None, name: str = "Template") -> str:
    """Render a `${dotted.path}` template against a context.

    Args:
        template: The template string.
        context: Mapping, pydantic model, or object providing the template variables.
        name: Human readable template name used in error messages.

    Returns:
        The rendered string. Unknown or None paths render as an empty string.

    Raises:
        TemplateConfigurationError: If the template itself is not a string.
    """
    if not isinstance(template, str):
        logger.error("Template is not a string", template_name=name, template=template)
        raise TemplateConfigurationError(name, template)

    context = {} if context is None else context
    rendered: list[str] = []
    for text, is_placeholder in split_template(template):
        if is_placeholder:
            rendered.append(stringify(resolve_path(context, text)))
        else:
            rendered.append(text)
    return "".join(rendered)
