"""Data models for documented and installed dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class VersionSpec:
    """A declared version plus its optional lock symbol.

    The structured fields are only set when ``raw`` is dotted-numeric;
    use ``dependencies.versions.parse_version_spec`` to build one.
    """
    raw: str
    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None
    prerelease: Optional[str] = None
    lock_symbol: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.raw, str) or not self.raw:
            raise ValueError("version must be a non-empty string")

    @property
    def is_structured(self) -> bool:
        return self.major is not None

    @property
    def is_locked(self) -> bool:
        return self.lock_symbol is not None

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class DependencyRecord:
    """One dependency as documented or as installed.

    ``description`` is installed-side metadata (e.g. from composer.lock)
    used by the writer; it does not take part in equality.
    """
    package_manager: str
    package_name: str
    version: VersionSpec
    additional_content: Tuple[str, ...] = ()
    description: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.package_name:
            raise ValueError("package name must not be empty")
        # Accept any iterable of lines from callers but store a tuple.
        if not isinstance(self.additional_content, tuple):
            object.__setattr__(self, "additional_content", tuple(self.additional_content))

    @property
    def key(self) -> PackageKey:
        return self.package_manager, self.package_name


# Type alias for stable map key for lookups.
PackageKey = Tuple[str, str]
