"""Validation modes and violation records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StrictMode(Enum):
    """How closely an installed version must follow the documented one."""
    EXISTING_OR_LOCKED = "existingOrLocked"
    MAJOR_AND_MINOR = "majorAndMinor"
    FULL_SEMVER_MATCH = "fullSemVerMatch"

    @classmethod
    def from_flags(cls, strict: bool = False, very_strict: bool = False) -> "StrictMode":
        """Map the CLI flags to a mode; --very-strict wins over --strict."""
        if very_strict:
            return cls.FULL_SEMVER_MATCH
        if strict:
            return cls.MAJOR_AND_MINOR
        return cls.EXISTING_OR_LOCKED


class ViolationKind(Enum):
    """Category of a validation finding."""
    MISSING_IN_DOCUMENTATION = "missing-in-documentation"
    MISSING_IN_INSTALLED = "missing-in-installed"
    VERSION_MISMATCH = "version-mismatch"
    LOCK_VIOLATION = "lock-violation"


@dataclass(frozen=True)
class ValidationViolation:
    """One discrepancy between installed and documented dependencies."""
    package_manager: str
    package_name: str
    kind: ViolationKind
    installed_version: Optional[str] = None
    documented_version: Optional[str] = None
    message: str = ""

    def to_string(self) -> str:
        return f"[{self.package_manager}] {self.package_name}: {self.message}"

    def __str__(self) -> str:
        return self.to_string()
