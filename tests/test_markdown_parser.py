"""Tests for the DEPENDENCIES.md parser."""

import pytest

from parsing.exceptions import MalformedEntryError, MissingSourceError
from parsing.markdown import MarkdownParser, cleanup_additional_content


@pytest.fixture
def parser():
    return MarkdownParser()


class TestEntryParsing:
    """Headings, versions and lock symbols."""

    def test_documented_example(self, parser):
        text = (
            "# composer\n"
            "## acme/widget `1.2.3` ^\n"
            "> A widget library.\n"
            "\n"
            "Extra detail line.\n"
        )
        catalog = parser.parse(text)

        assert catalog.managers() == ["composer"]
        assert len(catalog) == 1
        record = catalog.get("composer", "acme/widget")
        assert record.package_name == "acme/widget"
        assert record.version.raw == "1.2.3"
        assert record.version.lock_symbol == "^"
        assert record.additional_content == ("Extra detail line.",)

    def test_version_without_lock_symbol(self, parser):
        catalog = parser.parse("# node\n## left-pad `1.3.0`\n")
        record = catalog.get("node", "left-pad")
        assert record.version.lock_symbol is None
        assert (record.version.major, record.version.minor, record.version.patch) == (1, 3, 0)

    def test_emoji_lock_symbol_without_space(self, parser):
        catalog = parser.parse("# composer\n## acme/lock `2.0.0`🔒\n")
        assert catalog.get("composer", "acme/lock").version.lock_symbol == "🔒"

    def test_unknown_trailing_text_is_not_a_lock(self, parser):
        catalog = parser.parse("# composer\n## acme/widget `1.0.0` (pinned)\n")
        assert catalog.get("composer", "acme/widget").version.lock_symbol is None

    def test_custom_lock_symbols(self):
        parser = MarkdownParser(lock_symbols=["!!"])
        catalog = parser.parse("# composer\n## a/b `1.0.0` !!\n## c/d `1.0.0` ^\n")
        assert catalog.get("composer", "a/b").version.lock_symbol == "!!"
        assert catalog.get("composer", "c/d").version.lock_symbol is None

    def test_non_numeric_version_is_kept_raw(self, parser):
        catalog = parser.parse("# composer\n## acme/dev `dev-master`\n")
        version = catalog.get("composer", "acme/dev").version
        assert version.raw == "dev-master"
        assert version.major is None
        assert version.prerelease is None

    def test_manager_marker_takes_first_word(self, parser):
        catalog = parser.parse("# Node JS\n## left-pad `1.3.0`\n")
        assert catalog.managers() == ["Node"]

    def test_lines_are_left_trimmed(self, parser):
        catalog = parser.parse("   # composer\n  ## acme/widget `1.0.0`\n    indented note\n")
        assert catalog.get("composer", "acme/widget").additional_content == ("indented note",)

    def test_crlf_line_endings(self, parser):
        catalog = parser.parse("# composer\r\n## acme/widget `1.0.0`\r\n> desc\r\nnote\r\n")
        assert catalog.get("composer", "acme/widget").additional_content == ("note",)

    @pytest.mark.parametrize("separator", ["\u2028", "\x0b", "\x0c", "\x1c"])
    def test_only_newline_splits_lines(self, parser, separator):
        note = f"note{separator}still same line"
        catalog = parser.parse(f"# composer\n## acme/widget `1.0.0`\n> desc\n{note}\n")
        assert catalog.get("composer", "acme/widget").additional_content == (note,)


class TestDocumentStructure:
    """Sections, filtering and malformed input."""

    def test_lines_before_first_marker_are_ignored(self, parser):
        text = "Intro text\n## orphan `1.0.0`\n# composer\n## acme/widget `1.0.0`\n"
        catalog = parser.parse(text)
        assert [r.key for r in catalog] == [("composer", "acme/widget")]

    def test_groups_keep_document_order(self, parser):
        text = (
            "# node\n## left-pad `1.3.0`\n## express `4.18.2`\n"
            "# composer\n## acme/widget `1.0.0`\n"
        )
        catalog = parser.parse(text)
        assert catalog.managers() == ["node", "composer"]
        assert [r.package_name for r in catalog.all_flat()] == ["left-pad", "express", "acme/widget"]

    def test_manager_filter(self, parser):
        text = (
            "# node\n## left-pad `1.3.0`\nnode note\n"
            "# composer\n## acme/widget `1.0.0`\ncomposer note\n"
            "# node\n## express `4.18.2`\n"
        )
        catalog = parser.parse(text, "composer")
        assert catalog.managers() == ["composer"]
        record = catalog.get("composer", "acme/widget")
        assert record.additional_content == ("composer note",)
        assert ("node", "left-pad") not in catalog

    def test_filter_does_not_leak_notes_across_sections(self, parser):
        text = "# composer\n## acme/widget `1.0.0`\n# node\nnode-only line\n"
        catalog = parser.parse(text, "composer")
        assert catalog.get("composer", "acme/widget").additional_content == ()

    def test_empty_section_does_not_fail(self, parser):
        catalog = parser.parse("# composer\n# node\n## left-pad `1.3.0`\n")
        assert catalog.group("composer") == ()
        assert len(catalog) == 1

    def test_malformed_entry_becomes_content(self, parser):
        text = "# composer\n## acme/widget `1.0.0`\n## acme/broken 1.0.0\n"
        catalog = parser.parse(text)
        assert len(catalog) == 1
        assert catalog.get("composer", "acme/widget").additional_content == ("## acme/broken 1.0.0",)

    def test_malformed_entry_without_active_package_is_ignored(self, parser):
        catalog = parser.parse("# composer\n## acme/broken 1.0.0\nstray\n")
        assert len(catalog) == 0

    def test_strict_parser_raises_on_malformed_entry(self):
        parser = MarkdownParser(strict=True)
        with pytest.raises(MalformedEntryError) as exc:
            parser.parse("# composer\n## acme/broken 1.0.0\n")
        assert exc.value.line_number == 2

    def test_duplicate_entry_last_write_wins_in_place(self, parser):
        text = (
            "# composer\n"
            "## acme/first `1.0.0`\nold note\n"
            "## acme/second `2.0.0`\n"
            "## acme/first `1.1.0` ^\nnew note\n"
        )
        catalog = parser.parse(text)
        assert [r.package_name for r in catalog.all_flat()] == ["acme/first", "acme/second"]
        first = catalog.get("composer", "acme/first")
        assert first.version.raw == "1.1.0"
        assert first.version.lock_symbol == "^"
        assert first.additional_content == ("new note",)

    def test_parse_runs_are_independent(self, parser):
        parser.parse("# composer\n## acme/widget `1.0.0`\n")
        catalog = parser.parse("stray line\n")
        assert len(catalog) == 0
        assert catalog.managers() == []


class TestMissingSource:
    """Missing input is reported as MissingSourceError."""

    def test_none_text(self, parser):
        with pytest.raises(MissingSourceError):
            parser.parse(None)

    def test_empty_text_is_an_empty_catalog(self, parser):
        assert len(parser.parse("")) == 0

    def test_parse_file_missing(self, parser, tmp_path):
        with pytest.raises(MissingSourceError) as exc:
            parser.parse_file(str(tmp_path / "DEPENDENCIES.md"))
        assert exc.value.path.endswith("DEPENDENCIES.md")

    def test_parse_file(self, parser, tmp_path):
        path = tmp_path / "DEPENDENCIES.md"
        path.write_text("# composer\n## acme/widget `1.0.0` 🔒\n", encoding="utf-8")
        catalog = parser.parse_file(str(path))
        assert catalog.get("composer", "acme/widget").version.lock_symbol == "🔒"


class TestCleanup:
    """Free-text cleanup of additional content."""

    def test_only_first_description_marker_is_removed(self):
        lines = ["> description", "text", "> quoted later"]
        assert cleanup_additional_content(lines) == ["text", "> quoted later"]

    def test_content_before_marker_is_kept(self):
        assert cleanup_additional_content(["intro", "> description", "text"]) == ["intro", "text"]

    def test_blank_lines_collapse(self):
        lines = ["> d", "", "", "a", "", "", "", "b", "", ""]
        assert cleanup_additional_content(lines) == ["a", "", "b"]

    def test_only_blank_lines(self):
        assert cleanup_additional_content(["", "", ""]) == []

    def test_whitespace_only_line_is_content(self):
        assert cleanup_additional_content(["a", " ", "b"]) == ["a", " ", "b"]

    @pytest.mark.parametrize(
        "lines",
        [
            ["> d", "", "a", "", "", "b", ""],
            ["", "> d", "", "x"],
            ["a", "", "", ""],
            [],
        ],
    )
    def test_idempotent(self, lines):
        once = cleanup_additional_content(lines)
        assert cleanup_additional_content(once) == once

    def test_surviving_quote_is_taken_as_marker_on_second_pass(self):
        once = cleanup_additional_content(["> d", "text", "> quote"])
        assert once == ["text", "> quote"]
        assert cleanup_additional_content(once) == ["text"]
