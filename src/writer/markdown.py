"""Regenerates DEPENDENCIES.md from the installed and documented catalogs."""

from __future__ import annotations

import logging
from typing import List, Optional

from constants import Constants
from dependencies.catalog import DependencyCatalog
from dependencies.models import DependencyRecord

logger = logging.getLogger(__name__)


class MarkdownWriter:
    """Renders one section per installed manager and one entry per installed package.

    Versions come from the installed side; lock symbols and notes are carried
    over from the documented side so hand-written content survives an update.
    """

    def __init__(self, newline: Optional[str] = None):
        self.newline = newline or Constants.DEFAULT_NEWLINE

    def render(self, installed: DependencyCatalog, documented: DependencyCatalog) -> str:
        lines: List[str] = []
        for manager in installed.managers():
            records = installed.group(manager)
            if not records:
                continue
            lines.append(f"# {manager}")
            lines.append("")
            for record in records:
                lines.extend(self._render_entry(record, documented.get(manager, record.package_name)))
                lines.append("")

        while lines and lines[-1] == "":
            lines.pop()
        if not lines:
            return ""
        return self.newline.join(lines) + self.newline

    def write(self, filepath: str, installed: DependencyCatalog, documented: DependencyCatalog) -> None:
        """Write the rendered documentation, replacing the file content."""
        content = self.render(installed, documented)
        # newline="" keeps the configured newline untranslated
        with open(filepath, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        logger.info("Dependency documentation written to: %s", filepath)

    @staticmethod
    def _render_entry(installed: DependencyRecord, documented: Optional[DependencyRecord]) -> List[str]:
        lock_symbol = documented.version.lock_symbol if documented is not None else None
        heading = f"## {installed.package_name} `{installed.version.raw}`"
        if lock_symbol:
            heading = f"{heading} {lock_symbol}"

        lines = [heading, f"> {installed.description}" if installed.description else ">"]
        if documented is not None and documented.additional_content:
            lines.append("")
            lines.extend(documented.additional_content)
        return lines
