"""
Unit Tests for Note Content Rules.
"""

from scribe.backend.domain.content import (
    TITLE_MAX_LENGTH,
    UNTITLED,
    derive_title,
    is_blank,
    reading_time,
    strip_to_plain_text,
    validate_content,
)


class TestStripToPlainText:
    """Tests for markup reduction."""

    def test_removes_tags(self):
        assert strip_to_plain_text("<p>Hello <b>world</b></p>") == "Hello world"

    def test_adjacent_blocks_are_separated(self):
        assert strip_to_plain_text("<p>one</p><p>two</p>") == "one two"

    def test_nbsp_becomes_space(self):
        assert strip_to_plain_text("a&nbsp;&nbsp;b") == "a b"

    def test_collapses_whitespace_and_trims(self):
        assert strip_to_plain_text("  <p>\n a \t\t b </p>  ") == "a b"

    def test_none_and_empty(self):
        assert strip_to_plain_text(None) == ""
        assert strip_to_plain_text("") == ""

    def test_plain_text_is_unchanged(self):
        assert strip_to_plain_text("just text") == "just text"


class TestDeriveTitle:
    """Tests for title derivation."""

    def test_uses_plain_text(self):
        assert derive_title("<h1>Trip</h1><p>to Lisbon</p>") == "Trip to Lisbon"

    def test_truncates_to_sixty_characters(self):
        content = "<p>" + "x" * 100 + "</p>"
        title = derive_title(content)
        assert len(title) == TITLE_MAX_LENGTH
        assert title == "x" * 60

    def test_empty_content_is_untitled(self):
        assert derive_title("<p></p>") == UNTITLED
        assert derive_title("<p>&nbsp;</p>") == UNTITLED
        assert derive_title(None) == "Untitled"


class TestValidateContent:
    """Tests for the non-empty content rule."""

    def test_visible_text_is_valid(self):
        assert validate_content("<p>x</p>") is True

    def test_markup_only_is_invalid(self):
        assert validate_content("<p><br></p>") is False
        assert validate_content("<p>&nbsp;</p>") is False
        assert validate_content("") is False
        assert validate_content(None) is False


class TestIsBlank:
    def test_blank_values(self):
        assert is_blank(None)
        assert is_blank("")
        assert is_blank("   ")

    def test_non_blank(self):
        assert not is_blank(" a ")


class TestReadingTime:
    """Tests for the reading time estimate."""

    def test_short_text_is_one_minute(self):
        assert reading_time("<p>a few words</p>") == 1

    def test_empty_is_one_minute(self):
        assert reading_time("") == 1

    def test_scales_with_word_count(self):
        content = "<p>" + " ".join(["word"] * 1000) + "</p>"
        assert reading_time(content) == 5
