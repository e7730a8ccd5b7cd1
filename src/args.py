"""Argument parsing functionality for DepDoc."""

import argparse

from constants import Constants


def _add_common_arguments(parser):
    """Options shared by every action."""
    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Project directory holding the lockfiles and the dependency file (default: current directory)",
                        action="store",
                        type=str,
                        default=".")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print violations to the console.",
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depdoc",
        description=(
            "DepDoc - keep a DEPENDENCIES.md in sync with installed packages"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="action")
    subparsers.required = True

    validate = subparsers.add_parser(
        "validate",
        help=f"Validate an already generated {Constants.DEPENDENCIES_FILE}",
    )
    _add_common_arguments(validate)
    strictness = validate.add_mutually_exclusive_group()
    strictness.add_argument("--strict",
                            dest="STRICT",
                            help="Strict mode checks for major and minor versions",
                            action="store_true")
    strictness.add_argument("--very-strict",
                            dest="VERY_STRICT",
                            help="Very strict mode checks for full semantic versioning match",
                            action="store_true")
    validate.add_argument("-m", "--manager",
                          dest="MANAGER",
                          help="Only validate the section of this package manager, i.e: composer, node",
                          action="store",
                          type=str)

    update = subparsers.add_parser(
        "update",
        help=f"Update or create a {Constants.DEPENDENCIES_FILE}",
    )
    _add_common_arguments(update)

    return parser.parse_args(argv)
