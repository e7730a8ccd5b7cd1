"""Tests for DepDoc CLI arguments."""

import pytest

from args import parse_args


class TestValidateArgs:
    """'depdoc validate' options."""

    def test_defaults(self):
        ns = parse_args(["validate"])
        assert ns.action == "validate"
        assert ns.DIRECTORY == "."
        assert ns.CONFIG is None
        assert ns.LOG_LEVEL is None
        assert ns.STRICT is False
        assert ns.VERY_STRICT is False
        assert ns.MANAGER is None
        assert ns.QUIET is False

    def test_strict(self):
        ns = parse_args(["validate", "--strict"])
        assert ns.STRICT is True

    def test_very_strict(self):
        ns = parse_args(["validate", "--very-strict"])
        assert ns.VERY_STRICT is True

    def test_strict_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["validate", "--strict", "--very-strict"])

    def test_manager_and_directory(self):
        ns = parse_args(["validate", "-m", "composer", "-d", "/srv/app"])
        assert ns.MANAGER == "composer"
        assert ns.DIRECTORY == "/srv/app"

    def test_loglevel_is_uppercased(self):
        ns = parse_args(["validate", "--loglevel", "debug"])
        assert ns.LOG_LEVEL == "DEBUG"

    def test_invalid_loglevel(self):
        with pytest.raises(SystemExit):
            parse_args(["validate", "--loglevel", "chatty"])


class TestUpdateArgs:
    """'depdoc update' options."""

    def test_defaults(self):
        ns = parse_args(["update"])
        assert ns.action == "update"
        assert ns.DIRECTORY == "."
        assert not hasattr(ns, "STRICT")

    def test_config_and_logfile(self):
        ns = parse_args(["update", "-c", "depdoc.yml", "--logfile", "/tmp/depdoc.log", "-q"])
        assert ns.CONFIG == "depdoc.yml"
        assert ns.LOG_FILE == "/tmp/depdoc.log"
        assert ns.QUIET is True

    def test_strict_is_validate_only(self):
        with pytest.raises(SystemExit):
            parse_args(["update", "--strict"])


def test_action_is_required():
    with pytest.raises(SystemExit):
        parse_args([])
