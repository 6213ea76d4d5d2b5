"""
test_txt.py
-----------
Unit tests for the shared text utilities.
"""
import pytest

from mediameta.utils import txt


class TestClip:
    """Test clip()."""

    def test_trims_whitespace(self):
        assert txt.clip("  Beach  ", 10) == "Beach"

    def test_cuts_to_size(self):
        assert txt.clip("abcdefgh", 4) == "abcd"

    def test_no_trailing_space_after_cut(self):
        assert txt.clip("ab cdef", 3) == "ab"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_input(self, value):
        assert txt.clip(value, 10) == ""


class TestTitle:
    """Test title()."""

    def test_capitalizes_words(self):
        assert txt.title("golden retriever / berlin") == "Golden Retriever / Berlin"

    def test_keeps_upper_case(self):
        assert txt.title("trip to NYC") == "Trip To NYC"

    def test_leading_number(self):
        assert txt.title("23 birthday") == "23 Birthday"

    def test_apostrophe(self):
        """Letters after an apostrophe stay lowercase."""
        assert txt.title("dog's toy") == "Dog's Toy"

    def test_empty(self):
        assert txt.title("") == ""


class TestKeywords:
    """Test keywords() and the helpers built on it."""

    def test_lowercases_and_drops_numbers(self):
        result = txt.keywords("Golden Retriever at the Beach, 2020")
        assert result == ["golden", "retriever", "at", "the", "beach"]

    def test_short_latin_words_are_dropped(self):
        assert txt.keywords("go ox zoo") == ["zoo"]

    def test_hyphenated_words(self):
        assert txt.keywords("Baden-Baden") == ["baden-baden"]

    def test_non_latin_words(self):
        assert txt.keywords("東京 タワー") == ["東京", "タワー"]

    def test_empty(self):
        assert txt.keywords("") == []

    def test_unique_keywords_are_sorted(self):
        assert txt.unique_keywords("Dog, cat, DOG, bird") == ["bird", "cat", "dog"]

    def test_unique_words_drop_blanks(self):
        assert txt.unique_words(["b", " ", "", "a", "b"]) == ["a", "b"]


class TestIsStopWord:
    """Test is_stop_word()."""

    @pytest.mark.parametrize("word", ["the", "The", "img", "unknown", "x"])
    def test_stop_words(self, word):
        assert txt.is_stop_word(word) is True

    @pytest.mark.parametrize("word", ["beach", "berlin", "dog"])
    def test_regular_words(self, word):
        assert txt.is_stop_word(word) is False
