#!/usr/bin/env python3
"""
media_manager.py
--------------------
Media records and the reconciliation cycle.

A cycle merges one update into a record:

    1. candidate field values (title, description, capture time, position)
    2. classifier labels
    3. year/month derivation
    4. automatic title
    5. detail keywords (label keywords, location keywords on a new position)
    6. keyword index
    7. quality score

The cycle runs under the record's lock and inside the caller's session;
MediaMetaDB.session_scope() commits it as one transaction or rolls it
back completely.

Usage:
    with db.session_scope():
        record = db.media.get(uid="m3f9c0a1b2d4e5f60")
        db.media.reconcile(record, update, labels, location)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from mediameta.core.exceptions import MissingIdentityError, ValidationError
from mediameta.core.logging_manager import MediaMetaLogger, safe_logger
from mediameta.core.validators import DataValidator, utc_now
from mediameta.database.decorators import handle_db_errors, log_database_operation
from mediameta.database.models import MediaDetails, MediaRecord, Provenance, ShareLink, new_uid
from mediameta.dataclasses import ClassifierLabel, Labels, MediaUpdate, ResolvedLocation
from mediameta.dataclasses.media_update import DETAIL_FIELDS
from mediameta.reconcile import fields
from mediameta.reconcile.fields import FieldUpdate
from mediameta.reconcile.locks import RecordLocks
from mediameta.reconcile.quality import QualityScorer, default_quality_score
from mediameta.reconcile.titles import synthesize_title
from mediameta.utils import txt
from .base_manager import BaseManager
from .keyword_manager import KeywordManager
from .label_manager import LabelManager

KEYWORD_SEPARATOR = ", "


@dataclass
class ReconcileResult:
    """
    Summary of one reconciliation cycle.

    Attributes:
        uid: Record uid
        fields: FieldUpdate per submitted field (title, description, taken_at, coordinates)
        title: Outcome of the automatic title
        keywords: Keywords linked to the record after the cycle
        quality: Quality score after the cycle
    """

    uid: str
    fields: Dict[str, FieldUpdate] = field(default_factory=dict)
    title: Optional[FieldUpdate] = None
    keywords: Set[str] = field(default_factory=set)
    quality: int = 0

    def accepted(self) -> List[str]:
        """Names of the submitted fields that were accepted."""
        return sorted(name for name, update in self.fields.items() if update.accepted)


class MediaManager(BaseManager):
    """Manages MediaRecord rows and runs reconciliation cycles."""

    def __init__(
        self,
        session: Session,
        logger: Optional[MediaMetaLogger] = None,
        keywords: Optional[KeywordManager] = None,
        labels: Optional[LabelManager] = None,
        locks: Optional[RecordLocks] = None,
        quality_scorer: QualityScorer = default_quality_score,
    ):
        super().__init__(session, logger)
        self.keywords = keywords or KeywordManager(session, logger)
        self.labels = labels or LabelManager(session, logger)
        self.locks = locks or RecordLocks()
        self.quality_scorer = quality_scorer

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def exists(self, uid: str, include_deleted: bool = False) -> bool:
        return self.get(uid=uid, include_deleted=include_deleted) is not None

    def get(
        self,
        uid: Optional[str] = None,
        media_id: Optional[int] = None,
        include_deleted: bool = False,
    ) -> Optional[MediaRecord]:
        """
        Retrieve a record by uid or id.

        Args:
            uid: Public identifier
            media_id: Database id
            include_deleted: Include soft-deleted records

        Returns:
            MediaRecord if found, None otherwise
        """
        if media_id is not None:
            return self._get_by_id(MediaRecord, media_id, include_deleted=include_deleted)
        if uid is not None:
            return self._get_by_field(
                MediaRecord, "uid", uid, include_deleted=include_deleted
            )
        return None

    def get_all(self, include_deleted: bool = False) -> List[MediaRecord]:
        return self._get_all(MediaRecord, order_by="id", include_deleted=include_deleted)

    def count(self, include_deleted: bool = False) -> int:
        return self._count(MediaRecord, include_deleted=include_deleted)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_media")
    def create(self, metadata: Optional[Dict[str, Any]] = None) -> MediaRecord:
        """
        Create a record with automatic provenance everywhere.

        The capture time starts as the creation time with AUTO source, so
        year and month are unknown until a real capture time arrives.

        Args:
            metadata: Optional dict with keys:
                - uid: Public identifier (generated when missing)
                - favorite, private: Initial flags
                - details: Initial detail fields

        Returns:
            The flushed record with empty details

        Raises:
            ValidationError: If the uid exists or a detail field is unknown
        """
        metadata = metadata or {}
        uid = DataValidator.normalize_string(metadata.get("uid")) or new_uid()

        if self.exists(uid, include_deleted=True):
            raise ValidationError(f"Media already exists: {uid}")

        details = metadata.get("details") or {}
        unknown = set(details) - set(DETAIL_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown detail fields: {', '.join(sorted(unknown))}")

        now = utc_now()
        record = MediaRecord(
            uid=uid,
            taken_at=now,
            taken_at_local=now,
            favorite=bool(DataValidator.normalize_bool(metadata.get("favorite"))),
            private=bool(DataValidator.normalize_bool(metadata.get("private"))),
        )
        record.details = MediaDetails(**{k: str(v or "") for k, v in details.items()})

        self.session.add(record)
        self.session.flush()

        safe_logger(self.logger).log_info("Created media", {"uid": record.uid})
        return record

    # -------------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------------

    def apply_update(self, record: MediaRecord, update: MediaUpdate) -> Dict[str, FieldUpdate]:
        """
        Submit the candidate values of an update to the field rules.

        Detail fields and flags are not provenance-tracked and are copied.

        Returns:
            FieldUpdate per submitted provenance-tracked field
        """
        source = update.source
        results: Dict[str, FieldUpdate] = {}

        if update.title is not None:
            results["title"] = fields.set_title(record, update.title, source, self.logger)

        if update.description is not None:
            results["description"] = fields.set_description(
                record, update.description, source, self.logger
            )

        if update.taken_at is not None:
            results["taken_at"] = fields.set_taken_at(
                record,
                update.taken_at,
                update.taken_at_local,
                update.time_zone,
                source,
                self.logger,
            )

        if update.has_coordinates():
            results["coordinates"] = fields.set_coordinates(
                record,
                update.latitude,
                update.longitude,
                update.altitude,
                source,
                self.logger,
            )

        if update.details:
            if record.details is None:
                record.details = MediaDetails()
            for name, value in update.details.items():
                setattr(record.details, name, value)

        if update.favorite is not None:
            record.favorite = update.favorite
        if update.private is not None:
            record.private = update.private

        return results

    def merge_detail_keywords(self, record: MediaRecord, extra: Iterable[str]) -> str:
        """Normalize the detail keywords and add ``extra`` to them."""
        words = txt.keywords(record.details.keywords)
        words.extend(extra)
        record.details.keywords = KEYWORD_SEPARATOR.join(txt.unique_words(words))
        return record.details.keywords

    def store_place(self, record: MediaRecord, location: Optional[ResolvedLocation]) -> None:
        """Store the place of a new position, or clear it when none was resolved."""
        location = location or ResolvedLocation()
        record.place_name = location.name
        record.place_city = location.city
        record.place_state = location.state
        record.place_country_code = location.country_code
        record.place_country = location.country_name

    @handle_db_errors
    @log_database_operation("reconcile_media")
    def reconcile(
        self,
        record: MediaRecord,
        update: Optional[MediaUpdate] = None,
        labels: Optional[Iterable[ClassifierLabel]] = None,
        location: Optional[ResolvedLocation] = None,
    ) -> ReconcileResult:
        """
        Run one reconciliation cycle on a persisted record.

        Args:
            record: Record to update in place
            update: Candidate field values, None to only re-derive
            labels: Classifier labels to merge
            location: Location resolved for the record's position, the stored
                place is used when None and the position is unchanged

        Returns:
            ReconcileResult of the cycle

        Raises:
            MissingIdentityError: If the record has no id or uid
            DetailsNotLoadedError: If the record has no details
            DatabaseError: If storing keywords or labels fails
        """
        if not record.has_id():
            raise MissingIdentityError("Can't reconcile a record without id and uid")

        with self.locks.hold(record.uid):
            result = ReconcileResult(uid=record.uid)

            if update is not None:
                result.fields = self.apply_update(record, update)

            moved = result.fields.get("coordinates")
            if moved is not None and moved.accepted:
                self.store_place(record, location)
            elif location is None and record.has_lat_lng() and record.has_place():
                location = ResolvedLocation.from_record(record)

            labels = Labels(labels)
            if labels:
                self.labels.merge_labels(record, labels)

            fields.update_year_month(record)

            classified = self.labels.classify_labels(record)
            result.title = synthesize_title(
                record, location, classified, self.logger, ranked=True
            )

            if record.details_loaded():
                extra = classified.keywords()
                if location is not None and moved is not None and moved.accepted:
                    extra.extend(location.keyword_list())
                self.merge_detail_keywords(record, extra)

            result.keywords = self.keywords.reindex(record)

            record.quality = self.quality_scorer(record)
            result.quality = record.quality

            self.session.flush()

        safe_logger(self.logger).log_debug(
            "Reconciled media",
            {"uid": record.uid, "accepted": result.accepted(), "title": record.title},
        )
        return result

    def save(
        self,
        record: MediaRecord,
        labels: Optional[Iterable[ClassifierLabel]] = None,
        location: Optional[ResolvedLocation] = None,
    ) -> ReconcileResult:
        """Re-derive title, keywords and quality without new field values."""
        return self.reconcile(record, None, labels, location)

    def save_form(
        self,
        record: MediaRecord,
        update: MediaUpdate,
        location: Optional[ResolvedLocation] = None,
        labels: Optional[Iterable[ClassifierLabel]] = None,
    ) -> ReconcileResult:
        """
        Apply a manual edit.

        Every submitted field value is treated as MANUAL and the record is
        stamped as edited. Labels keep their own classifier source.

        Raises:
            MissingIdentityError: If the record has no id or uid
        """
        if not record.has_id():
            raise MissingIdentityError("Can't save form, id is empty")

        record.edited_at = utc_now()
        return self.reconcile(record, replace(update, source=Provenance.MANUAL), labels, location)

    # -------------------------------------------------------------------------
    # Delete / restore / share
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("delete_media")
    def delete(
        self,
        record: MediaRecord,
        permanently: bool = False,
        deleted_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        """
        Delete a record.

        Soft deletion keeps every association. Permanent deletion removes
        the row with its details, keyword and label associations and
        share links.
        """
        uid = record.uid

        if not permanently:
            record.soft_delete(deleted_by=deleted_by, reason=reason)
            self.session.flush()
            return

        with self.locks.hold(uid):
            self.session.delete(record)
            self.session.flush()

        safe_logger(self.logger).log_info("Deleted media permanently", {"uid": uid})

    @handle_db_errors
    def restore(self, record: MediaRecord) -> MediaRecord:
        """Undo a soft deletion."""
        record.restore()
        self.session.flush()
        return record

    @handle_db_errors
    def create_share_link(
        self, record: MediaRecord, expires_at: Optional[datetime] = None
    ) -> ShareLink:
        """Create a share token for a record."""
        if not record.has_id():
            raise MissingIdentityError("Can't share a record without id")

        link = ShareLink(token=secrets.token_urlsafe(24), media_id=record.id, expires_at=expires_at)
        self.session.add(link)
        self.session.flush()
        self.session.refresh(record, ["links"])
        return link
