"""Errors raised while reading dependency documentation."""

from __future__ import annotations

from typing import Optional


class DepDocError(Exception):
    """Base class for user-facing DepDoc errors."""


class MissingSourceError(DepDocError):
    """The dependency documentation could not be obtained."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        if path:
            super().__init__(f"Missing dependency file: {path}")
        else:
            super().__init__("No dependency documentation text was supplied")


class MalformedEntryError(DepDocError):
    """A line looks like a package entry but does not match the entry grammar."""

    def __init__(self, line: str, line_number: int):
        self.line = line
        self.line_number = line_number
        super().__init__(f"Malformed package entry on line {line_number}: {line!r}")
