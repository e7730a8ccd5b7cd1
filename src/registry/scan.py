"""Build the installed-package catalog from the lockfiles of a project directory."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, PackageManagers
from dependencies.catalog import DependencyCatalog
from dependencies.models import DependencyRecord

from registry.composer.lockfile_parser import parse_composer_lock
from registry.npm.lockfile_parser import parse_package_lock

logger = logging.getLogger(__name__)

# Candidate lockfiles per manager, first existing file wins.
_SOURCES: Dict[str, Tuple[Tuple[str, ...], Callable[[str], List[DependencyRecord]]]] = {
    PackageManagers.COMPOSER.value: ((Constants.COMPOSER_LOCK_FILE,), parse_composer_lock),
    PackageManagers.NODE.value: (
        (Constants.PACKAGE_LOCK_FILE, Constants.NPM_SHRINKWRAP_FILE),
        parse_package_lock,
    ),
}


def _discover_lockfile(dir_path: str, candidates: Iterable[str]) -> Optional[str]:
    for name in candidates:
        path = os.path.join(dir_path, name)
        if os.path.isfile(path):
            return path
    return None


def get_installed_packages(dir_path: str, manager: str) -> List[DependencyRecord]:
    """Return the installed packages of one manager, empty when it has no lockfile."""
    if manager not in _SOURCES:
        logger.warning("No installed-package source for '%s'; skipping.", manager)
        return []
    candidates, parse = _SOURCES[manager]
    lockfile = _discover_lockfile(dir_path, candidates)
    if lockfile is None:
        logger.debug("No %s lockfile found in %s", manager, dir_path)
        return []
    records = parse(lockfile)
    if is_debug_enabled(logger):
        logger.debug(
            "Installed packages read",
            extra=extra_context(
                event="lockfile_parsed",
                component="scan",
                manager=manager,
                path=lockfile,
                count=len(records),
            ),
        )
    return records


def scan_installed(dir_path: str, managers: Optional[Iterable[str]] = None) -> DependencyCatalog:
    """Collect installed packages for the enabled managers.

    Args:
        dir_path: Project directory holding the lockfiles.
        managers: Managers to scan in section order; defaults to all supported.

    Returns:
        DependencyCatalog grouped by manager; managers without a lockfile
        are absent.
    """
    selected = list(managers) if managers is not None else list(Constants.SUPPORTED_PACKAGES)
    records: List[DependencyRecord] = []
    for manager in selected:
        records.extend(get_installed_packages(dir_path, manager))
    return DependencyCatalog(records)
