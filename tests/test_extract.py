"""Tests for title and excerpt heuristics."""

from __future__ import annotations

from post_importer.extract import UNTITLED, extract_summary, extract_title


class TestExtractTitle:
    def test_first_h1_wins(self):
        content = "Intro line\n\n# First Heading\n\n# Second Heading\n"
        assert extract_title(content) == "First Heading"

    def test_falls_back_to_first_text_line(self):
        content = "![cover](cover.png)\n\n   Opening line of the note\nmore"
        assert extract_title(content) == "Opening line of the note"

    def test_fallback_line_is_cut_to_fifty_chars(self):
        line = "x" * 80
        assert extract_title(line) == "x" * 50

    def test_placeholder_when_nothing_usable(self):
        assert extract_title("") == UNTITLED
        assert extract_title("![only](image.png)\n\n") == UNTITLED


class TestExtractSummary:
    def test_skips_heading_and_short_blocks(self):
        content = "# Title\n\nShort.\n\nThis paragraph is clearly long enough to use."
        assert extract_summary(content) == "This paragraph is clearly long enough to use."

    def test_unwraps_emphasis_and_links(self):
        content = "# T\n\nThis has **bold**, *italic* and a [link](https://example.com/x) inside."
        assert extract_summary(content) == "This has bold, italic and a link inside."

    def test_keeps_underscores_inside_words(self):
        content = "Use the my_var_name setting for the snake_case config option here."
        assert extract_summary(content) == content

    def test_unwraps_underscore_emphasis(self):
        content = "Some _emphasized_ words and __strong__ ones in a sentence."
        assert extract_summary(content) == "Some emphasized words and strong ones in a sentence."

    def test_drops_images_and_html(self):
        content = "![hero](https://example.com/a.png)\n\n<p>Some <b>inline</b> html paragraph text</p>"
        assert extract_summary(content) == "Some inline html paragraph text"

    def test_removes_blockquote_markers(self):
        content = "> A quoted thought that is long enough\n> to count as a summary."
        assert extract_summary(content) == "A quoted thought that is long enough to count as a summary."

    def test_ignores_frontmatter_block(self):
        content = "---\ntitle: Existing\ndescription: Something\n---"
        assert extract_summary(content) == ""

    def test_empty_when_nothing_qualifies(self):
        assert extract_summary("# Title\n\nBody.") == ""
