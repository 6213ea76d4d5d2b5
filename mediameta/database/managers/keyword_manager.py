#!/usr/bin/env python3
"""
keyword_manager.py
--------------------
Keyword vocabulary and the per-record keyword index.

The index of a record is derived from its title, description and the
detail fields keywords, subject and artist. ``reindex`` brings the stored
associations in line with those texts: missing keywords are created and
linked, stale links are removed. Running it twice changes nothing.

Keywords flagged ``skip`` (stop words, blocked terms) stay in the
vocabulary but are never linked to a record.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional, Set

# --- Local imports ---
from mediameta.core.exceptions import (
    DetailsNotLoadedError,
    MissingIdentityError,
    ValidationError,
)
from mediameta.core.logging_manager import safe_logger
from mediameta.database.decorators import handle_db_errors, log_database_operation
from mediameta.database.models import Keyword, MediaKeyword, MediaRecord
from mediameta.utils import txt
from .base_manager import BaseManager


class KeywordManager(BaseManager):
    """Manages Keyword rows and MediaKeyword associations."""

    @staticmethod
    def normalize(word: str) -> str:
        """Lowercase, trimmed and clipped keyword text."""
        return txt.clip((word or "").strip().lower(), txt.CLIP_KEYWORD)

    def get(self, word: str) -> Optional[Keyword]:
        """Look up a keyword by its normalized text."""
        word = self.normalize(word)
        if not word:
            return None
        return self.session.query(Keyword).filter_by(keyword=word).first()

    def get_all(self, include_skipped: bool = False) -> List[Keyword]:
        query = self.session.query(Keyword)
        if not include_skipped:
            query = query.filter(Keyword.skip.is_(False))
        return query.order_by(Keyword.keyword).all()

    @handle_db_errors
    def get_or_create(self, word: str) -> Keyword:
        """
        Find or create a keyword.

        New stop words are created with ``skip=True``.

        Raises:
            ValidationError: If nothing remains after normalization
        """
        word = self.normalize(word)
        if not word:
            raise ValidationError("Keyword cannot be empty")

        keyword, _ = self._execute_with_retry(
            lambda: self._get_or_create(
                Keyword, {"keyword": word}, {"skip": txt.is_stop_word(word)}
            )
        )

        return keyword

    @handle_db_errors
    @log_database_operation("set_keyword_skip")
    def set_skip(self, word: str, skip: bool = True) -> Keyword:
        """
        Block or unblock a keyword.

        Blocking removes every existing association of the keyword.
        """
        keyword = self.get_or_create(word)
        keyword.skip = skip

        if skip:
            self.session.query(MediaKeyword).filter(
                MediaKeyword.keyword_id == keyword.id
            ).delete(synchronize_session="fetch")

        self.session.flush()
        return keyword

    def words_for(self, record: MediaRecord) -> Set[str]:
        """
        Tokens of every indexed text of a record.

        Raises:
            DetailsNotLoadedError: If the record details are not loaded
        """
        if not record.details_loaded():
            raise DetailsNotLoadedError(
                f"Can't index keywords, details not loaded ({record.uid})"
            )

        details = record.details
        words: Set[str] = set()
        for text in (
            record.title,
            record.description,
            details.keywords,
            details.subject,
            details.artist,
        ):
            words.update(txt.keywords(text))

        return words

    @handle_db_errors
    @log_database_operation("reindex_keywords")
    def reindex(self, record: MediaRecord) -> Set[str]:
        """
        Rebuild the keyword associations of a record.

        Args:
            record: Persisted record with loaded details

        Returns:
            Set of keywords linked to the record afterwards

        Raises:
            DetailsNotLoadedError: If the record details are not loaded
            MissingIdentityError: If the record has no database id
            DatabaseError: If a keyword or association cannot be stored
        """
        words = self.words_for(record)

        if not record.has_id():
            raise MissingIdentityError("Can't index keywords of an unsaved record")

        indexed: Set[str] = set()
        keyword_ids: List[int] = []

        for word in sorted(words):
            keyword = self.get_or_create(word)
            if keyword.skip:
                continue

            self._execute_with_retry(
                lambda: self._get_or_create(
                    MediaKeyword, {"media_id": record.id, "keyword_id": keyword.id}
                )
            )
            keyword_ids.append(keyword.id)
            indexed.add(keyword.keyword)

        stale = self.session.query(MediaKeyword).filter(MediaKeyword.media_id == record.id)
        if keyword_ids:
            stale = stale.filter(MediaKeyword.keyword_id.notin_(keyword_ids))

        removed = 0
        for link in stale.all():
            self.session.delete(link)
            removed += 1

        self.session.flush()
        self.session.expire(record, ["keyword_links"])

        safe_logger(self.logger).log_debug(
            "Indexed keywords",
            {"uid": record.uid, "indexed": len(indexed), "removed": removed},
        )

        return indexed

    def get_for_media(self, record: MediaRecord) -> List[str]:
        """Sorted keywords currently linked to a record."""
        rows = (
            self.session.query(Keyword.keyword)
            .join(MediaKeyword, MediaKeyword.keyword_id == Keyword.id)
            .filter(MediaKeyword.media_id == record.id)
            .order_by(Keyword.keyword)
            .all()
        )
        return [row[0] for row in rows]
