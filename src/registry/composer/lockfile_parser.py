"""Lockfile parser for the composer section (composer.lock)."""

from __future__ import annotations

import json
import logging
from typing import Dict, List

from constants import PackageManagers
from dependencies.models import DependencyRecord
from dependencies.versions import parse_version_spec

logger = logging.getLogger(__name__)


def parse_composer_lock_data(data: dict) -> List[DependencyRecord]:
    """Extract installed packages from decoded composer.lock content.

    Both "packages" and "packages-dev" are included; a package listed in
    both keeps its "packages" entry.
    """
    found: Dict[str, DependencyRecord] = {}
    for section in ("packages", "packages-dev"):
        entries = data.get(section)
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            version = entry.get("version")
            if not isinstance(name, str) or not name or not isinstance(version, str) or not version:
                logger.debug("Skipping composer.lock entry without name/version: %r", entry)
                continue
            if name in found:
                continue
            description = entry.get("description")
            found[name] = DependencyRecord(
                package_manager=PackageManagers.COMPOSER.value,
                package_name=name,
                version=parse_version_spec(version),
                description=description if isinstance(description, str) and description else None,
            )
    return [found[name] for name in sorted(found)]


def parse_composer_lock(lockfile_path: str) -> List[DependencyRecord]:
    """Extract installed packages from composer.lock.

    Args:
        lockfile_path: Path to composer.lock file

    Returns:
        Records sorted by package name; empty when the file cannot be parsed
    """
    try:
        with open(lockfile_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        logger.warning("composer.lock file not found: %s", e)
        return []
    except IOError as e:
        logger.warning("Failed to read composer.lock file: %s", e)
        return []
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse composer.lock (invalid format): %s", e)
        return []

    if not isinstance(data, dict):
        logger.warning("Failed to parse composer.lock (invalid format): top level is not an object")
        return []
    return parse_composer_lock_data(data)
