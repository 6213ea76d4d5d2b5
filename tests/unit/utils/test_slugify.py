"""Tests for slug generation."""
import pytest

from mediameta.database.managers.label_manager import label_slug
from mediameta.utils.slugify import slugify


class TestSlugify:
    """Test slugify()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Golden Retriever", "golden-retriever"),
            ("golden  retriever", "golden-retriever"),
            ("Café / Bar", "cafe-bar"),
            ("Rock & Roll", "rock-and-roll"),
            ("Berlin (Mitte)", "berlin-mitte"),
            ("dog's toy", "dogs-toy"),
            ("snake_case_name", "snake-case-name"),
            ("--edge--", "edge"),
        ],
    )
    def test_slugs(self, text, expected):
        assert slugify(text) == expected

    def test_empty(self):
        assert slugify("") == ""

    def test_max_length_strips_hyphen(self):
        assert slugify("ab cd", max_length=3) == "ab"


class TestLabelSlug:
    """Test label_slug()."""

    def test_latin_name(self):
        assert label_slug("Golden Retriever") == "golden-retriever"

    def test_non_latin_name_keeps_words(self):
        """Names without ASCII transliteration are not lost."""
        assert label_slug("東京 タワー") == "東京-タワー"

    def test_blank_name(self):
        assert label_slug("   ") == ""
