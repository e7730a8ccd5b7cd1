"""Lockfile parser for the node section (package-lock.json / npm-shrinkwrap.json).

Only packages installed at the top level of node_modules are reported:
those are the ones a project documents. Transitive packages nested below
another package are skipped.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional, Set

from constants import PackageManagers
from dependencies.models import DependencyRecord
from dependencies.versions import parse_version_spec

logger = logging.getLogger(__name__)

_NODE_MODULES = "node_modules/"


def _top_level_name(pkg_path: str) -> Optional[str]:
    """Return the package name for a top-level node_modules path, else None.

    "node_modules/lodash" -> "lodash", "node_modules/@types/node" -> "@types/node",
    "node_modules/a/node_modules/b" -> None.
    """
    if not pkg_path.startswith(_NODE_MODULES):
        return None
    tail = pkg_path[len(_NODE_MODULES):]
    if _NODE_MODULES in tail:
        return None
    parts = [p for p in tail.split("/") if p]
    if not parts:
        return None
    if parts[0].startswith("@"):
        return "/".join(parts[:2]) if len(parts) == 2 else None
    return parts[0] if len(parts) == 1 else None


def _declared_names(root: dict) -> Set[str]:
    """Names the root package declares as (dev/optional) dependencies."""
    names: Set[str] = set()
    for key in ("dependencies", "devDependencies", "optionalDependencies"):
        section = root.get(key)
        if isinstance(section, dict):
            names.update(section.keys())
    return names


def _record(name: str, version: str) -> DependencyRecord:
    return DependencyRecord(
        package_manager=PackageManagers.NODE.value,
        package_name=name,
        version=parse_version_spec(version),
    )


def parse_package_lock_data(data: dict) -> List[DependencyRecord]:
    """Extract top-level installed packages from decoded package-lock content.

    Supports lockfileVersion 1, 2, and 3.
    """
    versions: Dict[str, str] = {}
    lockfile_version = data.get("lockfileVersion", 1)

    packages = data.get("packages")
    if lockfile_version in (2, 3) and isinstance(packages, dict):
        root = packages.get("", {})
        declared = _declared_names(root) if isinstance(root, dict) else set()
        for pkg_path, pkg_info in packages.items():
            if not isinstance(pkg_info, dict):
                continue
            name = _top_level_name(pkg_path)
            version = pkg_info.get("version")
            if not name or not isinstance(version, str) or not version:
                continue
            if declared and name not in declared:
                continue
            versions[name] = version
    else:
        # Version 1: top level of the nested dependencies structure
        deps = data.get("dependencies")
        if isinstance(deps, dict):
            for name, pkg_info in deps.items():
                if isinstance(pkg_info, dict) and isinstance(pkg_info.get("version"), str):
                    versions[name] = pkg_info["version"]

    return [_record(name, versions[name]) for name in sorted(versions)]


def parse_package_lock(lockfile_path: str) -> List[DependencyRecord]:
    """Extract top-level installed packages from package-lock.json.

    Args:
        lockfile_path: Path to package-lock.json file

    Returns:
        Records sorted by package name; empty when the file cannot be parsed
    """
    try:
        with open(lockfile_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            logger.warning("Failed to parse package-lock.json: top level is not an object")
            return []
        return parse_package_lock_data(data)
    except (FileNotFoundError, IOError, json.JSONDecodeError) as e:
        logger.warning("Failed to parse package-lock.json: %s", e)
        return []
