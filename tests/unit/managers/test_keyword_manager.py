"""
test_keyword_manager.py
-----------------------
Tests for the keyword vocabulary and the per-record keyword index.
"""
import pytest

from mediameta.core.exceptions import (
    DetailsNotLoadedError,
    MissingIdentityError,
    ValidationError,
)
from mediameta.database.models import MediaDetails, MediaKeyword, MediaRecord, Provenance
from mediameta.reconcile import fields


def _link_count(session, record):
    return session.query(MediaKeyword).filter_by(media_id=record.id).count()


class TestGetOrCreate:
    """Test KeywordManager.get_or_create()."""

    def test_normalizes(self, keyword_manager):
        keyword = keyword_manager.get_or_create("  Beach ")

        assert keyword.keyword == "beach"
        assert keyword.skip is False
        assert keyword_manager.get("BEACH") is keyword

    def test_idempotent(self, keyword_manager):
        first = keyword_manager.get_or_create("beach")
        second = keyword_manager.get_or_create("Beach")

        assert first.id == second.id
        assert len(keyword_manager.get_all()) == 1

    def test_stop_words_are_skipped(self, keyword_manager):
        """Stop words are stored with the skip flag."""
        keyword = keyword_manager.get_or_create("the")

        assert keyword.skip is True
        assert keyword_manager.get_all() == []
        assert keyword_manager.get_all(include_skipped=True) == [keyword]

    def test_empty_word_raises(self, keyword_manager):
        with pytest.raises(ValidationError):
            keyword_manager.get_or_create("   ")


class TestReindex:
    """Test KeywordManager.reindex()."""

    def test_indexes_title_and_details(self, keyword_manager, stored_record):
        fields.set_title(stored_record, "Golden Retriever at the Beach", Provenance.META)
        stored_record.details.artist = "Jane Doe"

        indexed = keyword_manager.reindex(stored_record)

        assert indexed == {"golden", "retriever", "beach", "jane", "doe"}
        assert keyword_manager.get_for_media(stored_record) == sorted(indexed)
        assert stored_record.keyword_names == indexed

    def test_stop_words_are_not_linked(self, keyword_manager, stored_record):
        fields.set_title(stored_record, "At the beach", Provenance.META)

        keyword_manager.reindex(stored_record)

        assert keyword_manager.get("the").skip is True
        assert keyword_manager.get_for_media(stored_record) == ["beach"]

    def test_reindex_is_idempotent(self, keyword_manager, db_session, stored_record):
        """A second run with unchanged texts changes nothing."""
        fields.set_title(stored_record, "Golden Retriever", Provenance.META)

        first = keyword_manager.reindex(stored_record)
        count = _link_count(db_session, stored_record)
        second = keyword_manager.reindex(stored_record)

        assert first == second
        assert _link_count(db_session, stored_record) == count == 2

    def test_stale_keywords_are_removed(self, keyword_manager, stored_record):
        fields.set_title(stored_record, "Golden Retriever", Provenance.META)
        keyword_manager.reindex(stored_record)

        fields.set_title(stored_record, "Golden Sunset", Provenance.META)
        indexed = keyword_manager.reindex(stored_record)

        assert indexed == {"golden", "sunset"}
        assert keyword_manager.get_for_media(stored_record) == ["golden", "sunset"]
        assert keyword_manager.get("retriever") is not None

    def test_empty_texts_remove_all_links(self, keyword_manager, db_session, stored_record):
        fields.set_title(stored_record, "Golden Retriever", Provenance.META)
        keyword_manager.reindex(stored_record)

        stored_record.title = ""
        indexed = keyword_manager.reindex(stored_record)

        assert indexed == set()
        assert _link_count(db_session, stored_record) == 0

    def test_details_not_loaded(self, keyword_manager):
        with pytest.raises(DetailsNotLoadedError):
            keyword_manager.reindex(MediaRecord(title="Beach"))

    def test_unsaved_record(self, keyword_manager):
        record = MediaRecord(title="Beach")
        record.details = MediaDetails()

        with pytest.raises(MissingIdentityError):
            keyword_manager.reindex(record)


class TestSetSkip:
    """Test KeywordManager.set_skip()."""

    def test_blocking_removes_links(self, keyword_manager, stored_record):
        fields.set_title(stored_record, "Beach Party", Provenance.META)
        keyword_manager.reindex(stored_record)

        keyword_manager.set_skip("party")

        assert keyword_manager.get_for_media(stored_record) == ["beach"]
        assert keyword_manager.reindex(stored_record) == {"beach"}

    def test_unblocking(self, keyword_manager, stored_record):
        fields.set_title(stored_record, "Beach Party", Provenance.META)
        keyword_manager.set_skip("party")

        keyword_manager.set_skip("party", skip=False)

        assert keyword_manager.reindex(stored_record) == {"beach", "party"}
