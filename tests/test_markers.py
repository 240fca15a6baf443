"""Tests for FORGE/USER marker handling."""

from forge_context import FORGE_END, FORGE_START, USER_END, USER_START
from forge_context.markers import (
    extract_user_sections,
    has_markers,
    restore_user_sections,
    strip_forge_blocks,
    strip_markers,
    wrap_with_markers,
)


class TestWrapWithMarkers:
    def test_both_parts(self):
        wrapped = wrap_with_markers(user="User project description", forge="Forge workflow")
        assert wrapped == (
            f"{FORGE_START}\nForge workflow\n{FORGE_END}\n"
            f"\n{USER_START}\nUser project description\n{USER_END}"
        )

    def test_forge_only(self):
        assert wrap_with_markers(user="", forge="X") == "<!-- FORGE:START -->\nX\n<!-- FORGE:END -->"

    def test_user_only(self):
        assert wrap_with_markers(user="User content", forge="") == (
            f"\n{USER_START}\nUser content\n{USER_END}"
        )

    def test_parts_are_trimmed(self):
        wrapped = wrap_with_markers(forge="\n\n## Workflow\n\n")
        assert wrapped == f"{FORGE_START}\n## Workflow\n{FORGE_END}"

    def test_blank_parts(self):
        assert wrap_with_markers() == ""
        assert wrap_with_markers(user="  \n", forge="\t") == ""


class TestHasMarkers:
    def test_detects_each_sentinel(self):
        for marker in (FORGE_START, FORGE_END, USER_START, USER_END, "<!-- USER:START:notes -->"):
            assert has_markers(f"text\n{marker}\n")

    def test_plain_text(self):
        assert not has_markers("## Workflow\n<!-- a normal comment -->")
        assert not has_markers("")
        assert not has_markers(None)


class TestExtractUserSections:
    def test_anonymous_blocks_by_position(self):
        text = f"{USER_START}\nfirst\n{USER_END}\n## X\n{USER_START}second{USER_END}"
        assert extract_user_sections(text) == {"user_0": "\nfirst\n", "user_1": "second"}

    def test_named_blocks(self):
        text = "<!-- USER:START:notes -->\nkeep me\n<!-- USER:END:notes -->"
        assert extract_user_sections(text) == {"user_notes": "\nkeep me\n"}

    def test_mismatched_named_block_is_ignored(self):
        text = "<!-- USER:START:a -->\nbody\n<!-- USER:END:b -->"
        assert extract_user_sections(text) == {}

    def test_no_blocks(self):
        assert extract_user_sections("## Plain") == {}
        assert extract_user_sections(None) == {}


class TestRestoreUserSections:
    def test_round_trip(self):
        old = f"# Old\n{USER_START}\nmine\n{USER_END}\n<!-- USER:START:n -->x<!-- USER:END:n -->"
        new = f"# New\n{USER_START}\n{USER_END}\n<!-- USER:START:n --><!-- USER:END:n -->"
        restored = restore_user_sections(new, extract_user_sections(old))
        assert restored == (
            f"# New\n{USER_START}\nmine\n{USER_END}\n<!-- USER:START:n -->x<!-- USER:END:n -->"
        )

    def test_missing_key_empties_block(self):
        new = f"{USER_START}a{USER_END}{USER_START}b{USER_END}"
        restored = restore_user_sections(new, {"user_0": "kept"})
        assert restored == f"{USER_START}kept{USER_END}{USER_START}{USER_END}"

    def test_nothing_saved_is_noop(self):
        text = f"{USER_START}body{USER_END}"
        assert restore_user_sections(text, {}) == text


class TestStripMarkers:
    def test_removes_sentinel_lines_only(self):
        text = f"{FORGE_START}\n## Workflow\n{FORGE_END}\n\n{USER_START}\nnotes\n{USER_END}"
        assert strip_markers(text) == "## Workflow\n\nnotes"

    def test_inline_markers_are_kept(self):
        text = f"see {USER_START} inline"
        assert strip_markers(text) == text


class TestStripForgeBlocks:
    def test_removes_forge_block_and_keeps_user_block(self):
        text = f"{FORGE_START}\n## Workflow\n{FORGE_END}\n\n{USER_START}\nnotes\n{USER_END}"
        assert strip_forge_blocks(text) == f"\n{USER_START}\nnotes\n{USER_END}"

    def test_text_without_forge_block(self):
        assert strip_forge_blocks("## Notes\n\nkeep") == "## Notes\n\nkeep"
