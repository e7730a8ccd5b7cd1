"""Compare installed dependencies against the documented ones."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from constants import Constants, LockKind
from dependencies.catalog import DependencyCatalog
from dependencies.models import DependencyRecord, VersionSpec
from dependencies.versions import same_full_version, same_major, same_major_minor

from .models import StrictMode, ValidationViolation, ViolationKind

logger = logging.getLogger(__name__)


def _exact(installed: VersionSpec, documented: VersionSpec) -> bool:
    return installed.raw == documented.raw


_LOCK_CHECKS: Dict[LockKind, Callable[[VersionSpec, VersionSpec], bool]] = {
    LockKind.EXACT: _exact,
    LockKind.MINOR: same_major_minor,
    LockKind.MAJOR: same_major,
}


class PackageValidator:
    """Produces the ordered list of violations for a pair of catalogs.

    Documented records are checked first, in documented order, followed by
    installed records that have no documentation, in installed order.
    """

    def __init__(self, lock_symbols: Optional[Mapping[str, LockKind]] = None):
        """Initialize the validator.

        Args:
            lock_symbols: Lock symbol to LockKind mapping; defaults to
                Constants.DEFAULT_LOCK_SYMBOLS. Unknown symbols are exact.
        """
        self.lock_symbols = dict(
            lock_symbols if lock_symbols is not None else Constants.DEFAULT_LOCK_SYMBOLS
        )

    def compare(
        self,
        mode: StrictMode,
        installed: DependencyCatalog,
        documented: DependencyCatalog,
    ) -> List[ValidationViolation]:
        """Validate documented dependencies against installed ones.

        Args:
            mode: Strictness of the version comparison.
            installed: Catalog of installed packages.
            documented: Catalog parsed from the documentation.

        Returns:
            Violations in report order; empty when everything complies.
        """
        if installed is None or documented is None:
            raise TypeError("compare() requires two DependencyCatalog instances")
        if not isinstance(mode, StrictMode):
            raise TypeError(f"unsupported strict mode: {mode!r}")

        violations: List[ValidationViolation] = []
        for record in documented.all_flat():
            match = installed.get(record.package_manager, record.package_name)
            if match is None:
                violations.append(self._missing_in_installed(record))
                continue
            violation = self._check_version(mode, match, record)
            if violation is not None:
                violations.append(violation)

        for record in installed.all_flat():
            if record.key not in documented:
                violations.append(self._missing_in_documentation(record))

        logger.debug("Validation (%s) found %d violation(s)", mode.value, len(violations))
        return violations

    def _check_version(
        self,
        mode: StrictMode,
        installed: DependencyRecord,
        documented: DependencyRecord,
    ) -> Optional[ValidationViolation]:
        if mode is StrictMode.EXISTING_OR_LOCKED:
            return self._check_existing_or_locked(installed, documented)
        if mode is StrictMode.MAJOR_AND_MINOR:
            if same_major_minor(installed.version, documented.version):
                return None
            return self._mismatch(installed, documented, "major and minor version differ")
        if same_full_version(installed.version, documented.version):
            return None
        return self._mismatch(installed, documented, "version differs")

    def _check_existing_or_locked(
        self,
        installed: DependencyRecord,
        documented: DependencyRecord,
    ) -> Optional[ValidationViolation]:
        symbol = documented.version.lock_symbol
        if symbol is None:
            # Any installed version satisfies an unlocked entry.
            return None

        kind = self.lock_symbols.get(symbol, LockKind.EXACT)
        if _LOCK_CHECKS[kind](installed.version, documented.version):
            return None
        return ValidationViolation(
            package_manager=documented.package_manager,
            package_name=documented.package_name,
            kind=ViolationKind.LOCK_VIOLATION,
            installed_version=installed.version.raw,
            documented_version=documented.version.raw,
            message=(
                f"locked at {documented.version.raw} {symbol} ({kind.value}) "
                f"but installed is {installed.version.raw}"
            ),
        )

    @staticmethod
    def _mismatch(
        installed: DependencyRecord,
        documented: DependencyRecord,
        reason: str,
    ) -> ValidationViolation:
        return ValidationViolation(
            package_manager=documented.package_manager,
            package_name=documented.package_name,
            kind=ViolationKind.VERSION_MISMATCH,
            installed_version=installed.version.raw,
            documented_version=documented.version.raw,
            message=(
                f"{reason}: documented {documented.version.raw}, "
                f"installed {installed.version.raw}"
            ),
        )

    @staticmethod
    def _missing_in_installed(record: DependencyRecord) -> ValidationViolation:
        return ValidationViolation(
            package_manager=record.package_manager,
            package_name=record.package_name,
            kind=ViolationKind.MISSING_IN_INSTALLED,
            documented_version=record.version.raw,
            message=f"documented at {record.version.raw} but not installed",
        )

    @staticmethod
    def _missing_in_documentation(record: DependencyRecord) -> ValidationViolation:
        return ValidationViolation(
            package_manager=record.package_manager,
            package_name=record.package_name,
            kind=ViolationKind.MISSING_IN_DOCUMENTATION,
            installed_version=record.version.raw,
            message=f"installed at {record.version.raw} but not documented",
        )
