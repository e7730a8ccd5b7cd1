"""Dependency data model: versions, records and catalogs."""

from .models import DependencyRecord, PackageKey, VersionSpec
from .catalog import DependencyCatalog
from .versions import parse_version_spec

__all__ = [
    "DependencyRecord",
    "DependencyCatalog",
    "PackageKey",
    "VersionSpec",
    "parse_version_spec",
]
