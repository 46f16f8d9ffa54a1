"""Utility modules for shared functionality."""

from .retry import retry_on_rate_limit
from .templates import format_template

__all__ = [
    "format_template",
    "retry_on_rate_limit",
]
