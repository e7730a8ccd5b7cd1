"""Version-compliance validation between installed and documented catalogs."""

from .models import StrictMode, ValidationViolation, ViolationKind
from .package_validator import PackageValidator

__all__ = [
    "PackageValidator",
    "StrictMode",
    "ValidationViolation",
    "ViolationKind",
]
