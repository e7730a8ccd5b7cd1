"""Parser for the DEPENDENCIES.md documentation format.

Format::

    # composer
    ## acme/widget `1.2.3` 🔒
    > Description written by the update command.

    Free-form notes kept verbatim.

A ``#`` heading opens a package-manager section, a ``##`` heading with a
backtick-quoted version opens a package entry, and every other line up to
the next heading belongs to the current entry.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from dependencies.catalog import DependencyCatalog
from dependencies.models import DependencyRecord
from dependencies.versions import parse_version_spec

from .exceptions import MalformedEntryError, MissingSourceError

logger = logging.getLogger(__name__)

_MANAGER_PATTERN = re.compile(r"^#\s(?P<manager>\w+)")
_ENTRY_PREFIX = re.compile(r"^##\s")


def cleanup_additional_content(lines: Iterable[str]) -> List[str]:
    """Drop the description marker and blank-line noise from an entry's notes.

    Only the first line starting with ``>`` is removed; later ones are kept.
    Blank lines before the first kept line and at the end are removed, and
    runs of blank lines collapse to a single one.
    """
    cleaned: List[str] = []
    description_found = False
    prior_line_was_empty = False
    for line in lines:
        if not description_found and line.startswith(">"):
            description_found = True
            continue
        if line == "":
            if prior_line_was_empty or not cleaned:
                continue
            prior_line_was_empty = True
            cleaned.append(line)
            continue
        prior_line_was_empty = False
        cleaned.append(line)

    while cleaned and cleaned[-1] == "":
        cleaned.pop()
    return cleaned


@dataclass
class _EntryBuilder:
    """Mutable accumulator for one entry while the document is scanned."""
    package_manager: str
    package_name: str
    version: str
    lock_symbol: Optional[str]
    lines: List[str] = field(default_factory=list)

    def build(self) -> DependencyRecord:
        return DependencyRecord(
            package_manager=self.package_manager,
            package_name=self.package_name,
            version=parse_version_spec(self.version, self.lock_symbol),
            additional_content=tuple(cleanup_additional_content(self.lines)),
        )


@dataclass
class _ParseState:
    """Cursor and results of a single parse call."""
    manager_filter: Optional[str]
    current_manager: Optional[str] = None
    current_entry: Optional[_EntryBuilder] = None
    managers: List[str] = field(default_factory=list)
    entries: Dict[tuple, _EntryBuilder] = field(default_factory=dict)

    @property
    def skipping(self) -> bool:
        return bool(self.manager_filter) and self.manager_filter != self.current_manager


class MarkdownParser:
    """Turns DEPENDENCIES.md text into a DependencyCatalog."""

    def __init__(self, lock_symbols: Optional[Iterable[str]] = None, strict: bool = False):
        """Initialize the parser.

        Args:
            lock_symbols: Symbols accepted after the version; defaults to the
                keys of Constants.DEFAULT_LOCK_SYMBOLS.
            strict: Raise MalformedEntryError for ``##`` lines that do not
                match the entry grammar instead of keeping them as notes.
        """
        symbols = list(lock_symbols if lock_symbols is not None else Constants.DEFAULT_LOCK_SYMBOLS)
        self.lock_symbols = symbols
        self.strict = strict
        # Longest first so multi-character symbols win over their prefixes.
        alternatives = "|".join(re.escape(s) for s in sorted(symbols, key=len, reverse=True))
        lock_group = f"(?P<lock>{alternatives})?" if alternatives else "(?P<lock>)?"
        self._entry_pattern = re.compile(
            r"^##\s(?P<name>[^ ]+)\s`(?P<version>[^`]+)`\s?" + lock_group
        )

    def parse_file(self, filepath: str, package_manager: Optional[str] = None) -> DependencyCatalog:
        """Read and parse a documentation file.

        Raises:
            MissingSourceError: If the file does not exist or cannot be read.
        """
        if not os.path.isfile(filepath):
            raise MissingSourceError(filepath)
        try:
            with open(filepath, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            logger.debug("Failed to read %s: %s", filepath, e)
            raise MissingSourceError(filepath) from e
        return self.parse(text, package_manager)

    def parse(self, text: Optional[str], package_manager: Optional[str] = None) -> DependencyCatalog:
        """Parse documentation text.

        Args:
            text: Full Markdown content.
            package_manager: When set, only that manager's section is kept.

        Returns:
            DependencyCatalog of the documented dependencies.

        Raises:
            MissingSourceError: If no text was supplied.
        """
        if text is None:
            raise MissingSourceError()

        state = _ParseState(manager_filter=package_manager)
        for line_number, raw_line in enumerate(text.split("\n"), start=1):
            self._consume(state, raw_line.lstrip(), line_number)

        records = [entry.build() for entry in state.entries.values()]
        catalog = DependencyCatalog(records, managers=state.managers)
        if is_debug_enabled(logger):
            logger.debug(
                "Parsed dependency documentation",
                extra=extra_context(
                    event="parse_complete",
                    component="markdown_parser",
                    managers=len(catalog.managers()),
                    packages=len(catalog),
                    manager_filter=package_manager,
                ),
            )
        return catalog

    def _consume(self, state: _ParseState, line: str, line_number: int) -> None:
        match = _MANAGER_PATTERN.match(line)
        if match:
            state.current_manager = match.group("manager")
            state.current_entry = None
            if not state.skipping and state.current_manager not in state.managers:
                state.managers.append(state.current_manager)
            return

        if state.current_manager is None or state.skipping:
            return

        match = self._entry_pattern.match(line)
        if match:
            entry = _EntryBuilder(
                package_manager=state.current_manager,
                package_name=match.group("name"),
                version=match.group("version"),
                lock_symbol=match.group("lock") or None,
            )
            key = (entry.package_manager, entry.package_name)
            if key in state.entries:
                logger.debug("Duplicate entry for %s/%s on line %d replaces the earlier one",
                             key[0], key[1], line_number)
            state.entries[key] = entry
            state.current_entry = entry
            return

        if _ENTRY_PREFIX.match(line):
            if self.strict:
                raise MalformedEntryError(line.rstrip("\r\n"), line_number)
            logger.debug("Line %d looks like a package entry but does not match; kept as text",
                         line_number)

        if state.current_entry is None:
            return

        state.current_entry.lines.append(line.rstrip("\r\n"))
