"""Writing dependency documentation."""

from .markdown import MarkdownWriter

__all__ = ["MarkdownWriter"]
