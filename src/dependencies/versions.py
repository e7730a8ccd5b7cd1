"""Version string parsing and comparison helpers."""

from __future__ import annotations

import re
from typing import Optional, Tuple

import semantic_version

from .models import VersionSpec

# Up to three numeric parts with optional v-prefix, prerelease and build metadata.
# Longer versions (1.2.3.4) stay raw; coercion would fold the extra part into build.
_DOTTED_NUMERIC = re.compile(
    r"^[vV]?\d+(?:\.\d+){0,2}(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)


def coerce_version(raw: str) -> Optional[semantic_version.Version]:
    """Return a semantic version for dotted-numeric strings, else None.

    Missing minor/patch components are padded with zeros ("1.2" -> 1.2.0).
    """
    if not raw:
        return None
    text = raw.strip()
    if not _DOTTED_NUMERIC.match(text):
        return None
    if text[0] in "vV":
        text = text[1:]
    try:
        return semantic_version.Version.coerce(text)
    except ValueError:
        return None


def parse_version_spec(raw: str, lock_symbol: Optional[str] = None) -> VersionSpec:
    """Build a VersionSpec, filling the structured fields when ``raw`` parses."""
    parsed = coerce_version(raw)
    if parsed is None:
        return VersionSpec(raw=raw, lock_symbol=lock_symbol)
    prerelease = ".".join(parsed.prerelease) if parsed.prerelease else None
    return VersionSpec(
        raw=raw,
        major=parsed.major,
        minor=parsed.minor,
        patch=parsed.patch,
        prerelease=prerelease,
        lock_symbol=lock_symbol,
    )


def _components(spec: VersionSpec, depth: int) -> Tuple:
    return (spec.major, spec.minor, spec.patch, spec.prerelease)[:depth]


def same_major(left: VersionSpec, right: VersionSpec) -> bool:
    """Compare major components, falling back to raw equality when unparseable."""
    if left.is_structured and right.is_structured:
        return _components(left, 1) == _components(right, 1)
    return left.raw == right.raw


def same_major_minor(left: VersionSpec, right: VersionSpec) -> bool:
    """Compare major and minor components, falling back to raw equality."""
    if left.is_structured and right.is_structured:
        return _components(left, 2) == _components(right, 2)
    return left.raw == right.raw


def same_full_version(left: VersionSpec, right: VersionSpec) -> bool:
    """Compare major, minor, patch and prerelease, falling back to raw equality."""
    if left.is_structured and right.is_structured:
        return _components(left, 4) == _components(right, 4)
    return left.raw == right.raw
