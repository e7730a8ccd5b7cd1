"""Application configuration for the DepDoc CLI.

Configuration is read from an explicit ``--config`` path or from the first
of ``depdoc.yml``, ``depdoc.yaml`` and ``depdoc.json`` found in the target
directory. Example::

    newline: crlf
    dependencies_file: DEPENDENCIES.md
    managers:
      composer: true
      node: false
    lock_symbols:
      "🔒": exact
      "~": minor
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants, LockKind
from parsing.exceptions import DepDocError

logger = logging.getLogger(__name__)

_NEWLINE_ALIASES = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


class ConfigurationError(DepDocError):
    """A configuration file could not be read or holds an invalid value."""


@dataclass
class ApplicationConfiguration:
    """Settings shared by the validate and update commands."""
    newline: str = Constants.DEFAULT_NEWLINE
    dependencies_file: str = Constants.DEPENDENCIES_FILE
    managers: Dict[str, bool] = field(
        default_factory=lambda: {name: True for name in Constants.SUPPORTED_PACKAGES}
    )
    lock_symbols: Dict[str, LockKind] = field(
        default_factory=lambda: dict(Constants.DEFAULT_LOCK_SYMBOLS)
    )
    source: Optional[str] = None

    def enabled_managers(self) -> List[str]:
        return [name for name, enabled in self.managers.items() if enabled]


def _read_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _coerce_newline(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigurationError("newline: expected a non-empty string")
    alias = _NEWLINE_ALIASES.get(value.strip().lower())
    if alias:
        return alias
    if value not in ("\n", "\r\n", "\r"):
        raise ConfigurationError(f"newline: unsupported value {value!r}")
    return value


def _coerce_managers(value: Any) -> Dict[str, bool]:
    if not isinstance(value, dict):
        raise ConfigurationError("managers: expected a mapping of manager name to true/false")
    managers = {name: True for name in Constants.SUPPORTED_PACKAGES}
    for name, enabled in value.items():
        if not isinstance(enabled, bool):
            raise ConfigurationError(f"managers.{name}: expected true or false")
        managers[str(name)] = enabled
    return managers


def _coerce_lock_symbols(value: Any) -> Dict[str, LockKind]:
    if not isinstance(value, dict) or not value:
        raise ConfigurationError("lock_symbols: expected a non-empty mapping of symbol to exact/minor/major")
    symbols: Dict[str, LockKind] = {}
    for symbol, kind in value.items():
        if not isinstance(symbol, str) or not symbol.strip() or " " in symbol or "`" in symbol:
            raise ConfigurationError(f"lock_symbols: invalid symbol {symbol!r}")
        try:
            symbols[symbol] = LockKind(str(kind).strip().lower())
        except ValueError as e:
            raise ConfigurationError(
                f"lock_symbols.{symbol}: expected one of exact, minor, major"
            ) from e
    return symbols


def build_config(data: Dict[str, Any], source: Optional[str] = None) -> ApplicationConfiguration:
    """Validate a decoded configuration mapping."""
    config = ApplicationConfiguration(source=source)
    if "newline" in data:
        config.newline = _coerce_newline(data["newline"])
    if "dependencies_file" in data:
        value = data["dependencies_file"]
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError("dependencies_file: expected a file name")
        config.dependencies_file = value.strip()
    if "managers" in data:
        config.managers = _coerce_managers(data["managers"])
    if "lock_symbols" in data:
        config.lock_symbols = _coerce_lock_symbols(data["lock_symbols"])
    unknown = sorted(set(data) - {"newline", "dependencies_file", "managers", "lock_symbols"})
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
    return config


def find_config_file(directory: str) -> Optional[str]:
    for name in Constants.CONFIG_FILES:
        path = os.path.join(directory, name)
        if os.path.isfile(path):
            return path
    return None


def load_config(path: Optional[str] = None, directory: Optional[str] = None) -> ApplicationConfiguration:
    """Load configuration with precedence: explicit path, directory default file, built-ins.

    Raises:
        ConfigurationError: If an explicit path is missing or any file is invalid.
    """
    if path:
        if not os.path.isfile(path):
            raise ConfigurationError(f"Config file not found: {path}")
        config_path: Optional[str] = path
    else:
        config_path = find_config_file(directory) if directory else None

    if config_path is None:
        logger.debug("No configuration file found; using defaults")
        return ApplicationConfiguration()

    logger.debug("Loading configuration from %s", config_path)
    return build_config(_read_config_file(config_path), source=config_path)
