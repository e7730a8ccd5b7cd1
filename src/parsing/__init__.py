"""Reading DEPENDENCIES.md into a dependency catalog."""

from .exceptions import DepDocError, MalformedEntryError, MissingSourceError
from .markdown import MarkdownParser, cleanup_additional_content

__all__ = [
    "DepDocError",
    "MalformedEntryError",
    "MissingSourceError",
    "MarkdownParser",
    "cleanup_additional_content",
]
