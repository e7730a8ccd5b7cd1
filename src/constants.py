"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    VALIDATION_FAILED = 1
    FILE_ERROR = 2
    CONFIG_ERROR = 3


class PackageManagers(Enum):
    """Package managers with a built-in installed-package source.

    Args:
        Enum (string): Package manager section names.
    """

    COMPOSER = "composer"
    NODE = "node"


class LockKind(Enum):
    """How strictly a lock symbol pins the documented version."""

    EXACT = "exact"
    MINOR = "minor"
    MAJOR = "major"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEPENDENCIES_FILE = "DEPENDENCIES.md"
    CONFIG_FILES = ["depdoc.yml", "depdoc.yaml", "depdoc.json"]
    COMPOSER_LOCK_FILE = "composer.lock"
    PACKAGE_LOCK_FILE = "package-lock.json"
    NPM_SHRINKWRAP_FILE = "npm-shrinkwrap.json"
    SUPPORTED_PACKAGES = [
        PackageManagers.COMPOSER.value,
        PackageManagers.NODE.value,
    ]
    DEFAULT_NEWLINE = "\n"
    DEFAULT_LOCK_SYMBOLS = {
        "🔒": LockKind.EXACT,
        "⛔": LockKind.EXACT,
        "^": LockKind.EXACT,
        "~": LockKind.EXACT,
    }
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "DEPDOC_LOG_LEVEL"
