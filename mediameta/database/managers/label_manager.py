#!/usr/bin/env python3
"""
label_manager.py
--------------------
Label vocabulary and media/label associations.

Labels are shared across records and keyed by (slug, priority). An
association keeps the lowest uncertainty observed for its pair together
with the source of that observation.

Events:
    labels.created: Published with {"labels": [Label]} for new labels
    count.labels: Published with {"count": 1} for new labels with priority >= 0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Iterable, List, Optional, Tuple

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from mediameta.core.events import TOPIC_COUNT_LABELS, TOPIC_LABELS_CREATED, EventHub
from mediameta.core.exceptions import MissingIdentityError, ValidationError
from mediameta.core.logging_manager import MediaMetaLogger, safe_logger
from mediameta.database.decorators import handle_db_errors, log_database_operation
from mediameta.database.models import Label, MediaLabel, MediaRecord
from mediameta.dataclasses import ClassifierLabel, Labels
from mediameta.dataclasses.classifier_label import UNCERTAINTY_INVALID
from mediameta.utils import txt
from mediameta.utils.slugify import slugify
from .base_manager import BaseManager


def label_slug(name: str) -> str:
    """Slug of a label name; non-latin names keep their lowercase words."""
    slug = slugify(name, max_length=txt.CLIP_LABEL)
    if slug:
        return slug
    return txt.clip("-".join((name or "").lower().split()), txt.CLIP_LABEL)


class LabelManager(BaseManager):
    """Manages Label rows and MediaLabel associations."""

    def __init__(
        self,
        session: Session,
        logger: Optional[MediaMetaLogger] = None,
        events: Optional[EventHub] = None,
    ):
        super().__init__(session, logger)
        self.events = events

    def _publish(self, topic: str, data: dict) -> None:
        if self.events is not None:
            self.events.publish(topic, data)

    def get(self, name: str, priority: int = 0) -> Optional[Label]:
        slug = label_slug(name)
        if not slug:
            return None
        return self.session.query(Label).filter_by(slug=slug, priority=priority).first()

    def get_all(self) -> List[Label]:
        return self._get_all(Label, order_by="slug")

    @handle_db_errors
    def get_or_create(self, name: str, priority: int = 0) -> Tuple[Label, bool]:
        """
        Find or create a label.

        Args:
            name: Label name (any casing)
            priority: Label priority

        Returns:
            Tuple of (label, created)

        Raises:
            ValidationError: If the name has no usable characters
        """
        display = txt.title(txt.clip(name, txt.CLIP_LABEL))
        slug = label_slug(display)
        if not slug:
            raise ValidationError(f"Label name cannot be empty: {name!r}")

        label, created = self._execute_with_retry(
            lambda: self._get_or_create(
                Label, {"slug": slug, "priority": priority}, {"label_name": display}
            )
        )

        if created:
            safe_logger(self.logger).log_info(
                "Created label", {"slug": slug, "priority": priority}
            )
            self._publish(TOPIC_LABELS_CREATED, {"labels": [label]})
            if priority >= 0:
                self._publish(TOPIC_COUNT_LABELS, {"count": 1})

        return label, created

    @handle_db_errors
    @log_database_operation("merge_labels")
    def merge_labels(
        self, record: MediaRecord, labels: Iterable[ClassifierLabel]
    ) -> List[MediaLabel]:
        """
        Merge classifier labels into the record's label associations.

        New pairs are stored with the incoming uncertainty and source. An
        existing pair is improved when the incoming uncertainty is lower
        and the stored one is below 100; otherwise it is left alone.

        Args:
            record: Persisted record
            labels: Incoming labels

        Returns:
            The record's associations, reloaded from the database

        Raises:
            MissingIdentityError: If the record has no database id
        """
        if not record.has_id():
            raise MissingIdentityError("Can't merge labels into an unsaved record")

        for incoming in labels:
            label, _ = self.get_or_create(incoming.title(), incoming.priority)
            uncertainty = min(max(incoming.uncertainty, 0), UNCERTAINTY_INVALID)

            link, created = self._execute_with_retry(
                lambda: self._get_or_create(
                    MediaLabel,
                    {"media_id": record.id, "label_id": label.id},
                    {"uncertainty": uncertainty, "label_src": incoming.source},
                )
            )

            if created:
                continue

            if uncertainty < link.uncertainty < UNCERTAINTY_INVALID:
                safe_logger(self.logger).log_debug(
                    "Improved label uncertainty",
                    {
                        "uid": record.uid,
                        "label": label.slug,
                        "from": link.uncertainty,
                        "to": uncertainty,
                    },
                )
                link.uncertainty = uncertainty
                link.label_src = incoming.source

        self.session.flush()
        self.session.refresh(record, ["labels"])

        return list(record.labels)

    def classify_labels(self, record: MediaRecord) -> Labels:
        """
        Ranked label view of a record's associations.

        Associations whose label row is missing are logged and skipped.
        """
        result = Labels()

        for link in record.labels:
            if link.label is None:
                safe_logger(self.logger).log_warning(
                    "Empty label reference while classifying",
                    {"uid": record.uid, "label_id": link.label_id},
                )
                continue

            result.append(
                ClassifierLabel(
                    name=link.label.label_name,
                    source=link.label_src,
                    uncertainty=link.uncertainty,
                    priority=link.label.priority,
                )
            )

        return result.ranked()

    @handle_db_errors
    def remove_label(self, record: MediaRecord, name: str, priority: int = 0) -> bool:
        """Remove one label from a record; True when an association was removed."""
        label = self.get(name, priority)
        if label is None:
            return False

        link = self.session.get(MediaLabel, (record.id, label.id))
        if link is None:
            return False

        self.session.delete(link)
        self.session.flush()
        self.session.refresh(record, ["labels"])
        return True
