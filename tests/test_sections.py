"""Tests for the section parser."""

import pytest

from forge_context.sections import (
    Section,
    heading_count,
    normalize_line_endings,
    parse_semantic_sections,
)

NESTED = "# Title\n\nIntro.\n\n## A\n\nBody A.\n\n### A.1\n\nBody A1.\n## B\n"


class TestParseSemanticSections:
    def test_headers_and_levels(self):
        sections = parse_semantic_sections(NESTED)
        assert [(s.level, s.header) for s in sections] == [
            (1, "Title"), (2, "A"), (3, "A.1"), (2, "B"),
        ]

    def test_content_is_trimmed_body(self):
        sections = parse_semantic_sections(NESTED)
        assert [s.content for s in sections] == ["Intro.", "Body A.", "Body A1.", ""]

    def test_raw_keeps_heading_and_blank_lines(self):
        title = parse_semantic_sections(NESTED)[0]
        assert title.raw == "# Title\n\nIntro.\n"

    def test_line_ranges(self):
        sections = parse_semantic_sections(NESTED)
        assert [(s.start_line, s.end_line) for s in sections] == [
            (0, 3), (4, 7), (8, 10), (11, 12),
        ]

    def test_line_ranges_are_contiguous(self, load_fixture):
        text = load_fixture("simple-project-description.md")
        sections = parse_semantic_sections(text)
        assert sections[0].start_line == 0
        for prev, nxt in zip(sections, sections[1:]):
            assert nxt.start_line == prev.end_line + 1
        assert sections[-1].end_line == len(text.split("\n")) - 1

    def test_raw_reconstructs_document(self, load_fixture):
        text = load_fixture("conflicting-sections.md")
        sections = parse_semantic_sections(text)
        assert "\n".join(s.raw for s in sections) == text

    def test_header_is_stripped(self):
        sections = parse_semantic_sections("##   Spaced Out   \nbody")
        assert sections[0].header == "Spaced Out"

    def test_consecutive_headings(self):
        sections = parse_semantic_sections("## A\n## B")
        assert len(sections) == 2
        assert sections[0].content == ""
        assert sections[0].raw == "## A"
        assert (sections[1].start_line, sections[1].end_line) == (1, 1)

    def test_preamble_is_single_section(self):
        sections = parse_semantic_sections("Line one\n\nLine two\n\n## H\nx")
        preamble = sections[0]
        assert preamble.is_preamble
        assert preamble.level == 0
        assert preamble.header is None
        assert preamble.content == "Line one\n\nLine two"
        assert preamble.raw == "Line one\n\nLine two\n"
        assert (preamble.start_line, preamble.end_line) == (0, 3)
        assert sections[1].header == "H"

    def test_blank_prefix_yields_no_preamble(self):
        sections = parse_semantic_sections("\n  \n## H\nx")
        assert len(sections) == 1
        assert sections[0].header == "H"
        assert sections[0].start_line == 2

    def test_plain_text_is_one_preamble(self):
        sections = parse_semantic_sections("Just plain text without headers.")
        assert len(sections) == 1
        assert sections[0].is_preamble
        assert sections[0].content == "Just plain text without headers."

    def test_whitespace_only_document(self):
        assert parse_semantic_sections("   \n\t\n\n") == []

    @pytest.mark.parametrize("value", [None, "", 42, ["## A"]])
    def test_non_text_input(self, value):
        assert parse_semantic_sections(value) == []

    @pytest.mark.parametrize("line", ["#######  Seven", "#NoSpace", "text # not heading"])
    def test_non_heading_lines(self, line):
        sections = parse_semantic_sections(f"## Real\n{line}")
        assert len(sections) == 1
        assert sections[0].content == line

    def test_fenced_hash_is_a_heading(self):
        sections = parse_semantic_sections("## Build\n```\n# comment\n```")
        assert [s.header for s in sections] == ["Build", "comment"]

    def test_heading_count_matches_sections(self, load_fixture):
        for name in ("simple-project-description.md", "fuzzy-headers.md", "merge-toolchain.md"):
            text = load_fixture(name)
            headed = [s for s in parse_semantic_sections(text) if not s.is_preamble]
            assert len(headed) == heading_count(text)

    def test_sections_are_immutable(self):
        section = parse_semantic_sections("## A\nbody")[0]
        assert isinstance(section, Section)
        with pytest.raises(AttributeError):
            section.header = "B"


class TestNormalizeLineEndings:
    def test_crlf_and_cr(self):
        assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"

    def test_passthrough_empty(self):
        assert normalize_line_endings("") == ""
        assert normalize_line_endings(None) is None
