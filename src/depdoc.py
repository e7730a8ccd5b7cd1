"""DepDoc - keep a DEPENDENCIES.md in sync with installed packages

    validate: compare the documented dependencies against the lockfiles
    update:   regenerate the documentation, keeping hand-written notes

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from cli_config import ApplicationConfiguration, ConfigurationError, load_config
from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from dependencies.catalog import DependencyCatalog
from parsing.exceptions import DepDocError
from parsing.markdown import MarkdownParser
from registry.scan import scan_installed
from validator.models import StrictMode
from validator.package_validator import PackageValidator
from writer.markdown import MarkdownWriter

logger = logging.getLogger(__name__)


def get_installed_packages(directory, config, manager=None):
    """Collect installed packages for the enabled managers.

    Args:
        directory (str): Project directory holding the lockfiles.
        config (ApplicationConfiguration): Loaded configuration.
        manager (str, optional): Restrict to one manager section.

    Returns:
        DependencyCatalog: Installed packages.
    """
    managers = config.enabled_managers()
    if manager:
        if manager not in managers:
            logger.warning("Package manager '%s' is not enabled; nothing is installed for it.", manager)
            return DependencyCatalog()
        managers = [manager]
    return scan_installed(directory, managers)


def get_strict_mode(args):
    """Map the validate flags to a StrictMode."""
    return StrictMode.from_flags(
        strict=getattr(args, "STRICT", False),
        very_strict=getattr(args, "VERY_STRICT", False),
    )


def run_validate(args, config: ApplicationConfiguration, directory: str) -> int:
    """Validate the dependency file of ``directory``."""
    filepath = os.path.join(directory, config.dependencies_file)
    if not os.path.isfile(filepath):
        logging.error("Missing dependency file in: %s", filepath)
        return ExitCodes.FILE_ERROR.value

    manager = getattr(args, "MANAGER", None)
    parser = MarkdownParser(lock_symbols=config.lock_symbols.keys())
    with Timer() as t:
        installed = get_installed_packages(directory, config, manager)
        documented = parser.parse_file(filepath, manager)
        mode = get_strict_mode(args)
        violations = PackageValidator(config.lock_symbols).compare(mode, installed, documented)

    if is_debug_enabled(logger):
        logger.debug(
            "Validation finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="validate",
                mode=mode.value,
                count=len(violations),
                duration_ms=t.duration_ms(),
            ),
        )

    if not violations:
        logging.info("Validation result: empty, all fine.")
        return ExitCodes.SUCCESS.value

    logging.error("Validation result: found %s error(s)", len(violations))
    if not getattr(args, "QUIET", False):
        for violation in violations:
            print(violation.to_string())
    return ExitCodes.VALIDATION_FAILED.value


def run_update(args, config: ApplicationConfiguration, directory: str) -> int:  # pylint: disable=unused-argument
    """Create or regenerate the dependency file of ``directory``."""
    filepath = os.path.join(directory, config.dependencies_file)
    if not os.path.isfile(filepath):
        logging.info("Creating new file at: %s", filepath)
        documented = DependencyCatalog()
    else:
        parser = MarkdownParser(lock_symbols=config.lock_symbols.keys())
        documented = parser.parse_file(filepath)

    installed = get_installed_packages(directory, config)
    if len(installed) == 0:
        logging.warning("No installed packages found in: %s", directory)

    MarkdownWriter(config.newline).write(filepath, installed, documented)
    return ExitCodes.SUCCESS.value


_ACTIONS = {
    "validate": run_validate,
    "update": run_update,
}


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    directory = os.path.abspath(args.DIRECTORY)
    if not os.path.isdir(directory):
        logging.error("Not a directory: %s", directory)
        return ExitCodes.FILE_ERROR.value

    try:
        config = load_config(getattr(args, "CONFIG", None), directory)
    except ConfigurationError as e:
        logging.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value

    try:
        return _ACTIONS[args.action](args, config, directory)
    except DepDocError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR.value
    except OSError as e:
        logging.error("File couldn't be written to disk: %s", e)
        return ExitCodes.FILE_ERROR.value


if __name__ == "__main__":
    sys.exit(main())
