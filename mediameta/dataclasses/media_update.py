"""
media_update.py
---------------
Candidate values for one reconciliation cycle.

A MediaUpdate carries the values an ingestion pipeline or a form submits,
together with the provenance they are submitted under. Fields left as None
are not part of the update. An UpdateDocument bundles an update with the
classifier labels and the resolved location of the same cycle, which is
the shape of the YAML files accepted by the CLI:

    source: meta
    title: Beach walk
    taken_at: 2020-05-23T14:02:11Z
    taken_at_local: 2020-05-23T16:02:11
    time_zone: Europe/Berlin
    latitude: 52.5163
    longitude: 13.3777
    details:
      keywords: dog, beach
      artist: Jane Doe
    labels:
      - {name: dog, uncertainty: 10, priority: 2}
    location:
      city: Berlin
      country_name: Germany
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from mediameta.core.exceptions import ValidationError
from mediameta.core.validators import DataValidator
from mediameta.database.models.enums import Provenance
from mediameta.dataclasses.classifier_label import ClassifierLabel, Labels
from mediameta.dataclasses.resolved_location import ResolvedLocation

DETAIL_FIELDS = ("keywords", "subject", "artist", "copyright", "notes")


@dataclass
class MediaUpdate:
    """
    Candidate field values and their provenance.

    Attributes:
        source: Provenance of every value in this update
        title, description: Candidate texts
        taken_at, taken_at_local, time_zone: Candidate capture time
        latitude, longitude, altitude: Candidate position
        details: Replacement values for detail fields (keywords, subject, ...)
        favorite, private: Flag changes
    """

    source: Provenance = Provenance.AUTO
    title: Optional[str] = None
    description: Optional[str] = None
    taken_at: Optional[datetime] = None
    taken_at_local: Optional[datetime] = None
    time_zone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[int] = None
    details: Dict[str, str] = field(default_factory=dict)
    favorite: Optional[bool] = None
    private: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaUpdate":
        """
        Build an update from a mapping.

        Raises:
            ValidationError: On unknown provenance, detail fields or bad values
        """
        details = data.get("details") or {}
        if not isinstance(details, dict):
            raise ValidationError("'details' must be a mapping")
        unknown = set(details) - set(DETAIL_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown detail fields: {', '.join(sorted(unknown))}")

        return cls(
            source=Provenance.coerce(data.get("source")),
            title=data.get("title"),
            description=data.get("description"),
            taken_at=DataValidator.normalize_datetime(data.get("taken_at")),
            taken_at_local=DataValidator.normalize_datetime(data.get("taken_at_local")),
            time_zone=DataValidator.normalize_string(data.get("time_zone")),
            latitude=DataValidator.normalize_float(data.get("latitude")),
            longitude=DataValidator.normalize_float(data.get("longitude")),
            altitude=DataValidator.normalize_int(data.get("altitude")),
            details={k: str(v) if v is not None else "" for k, v in details.items()},
            favorite=DataValidator.normalize_bool(data.get("favorite")),
            private=DataValidator.normalize_bool(data.get("private")),
        )

    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass
class UpdateDocument:
    """An update together with the labels and location of the same cycle."""

    update: MediaUpdate
    labels: Labels = field(default_factory=Labels)
    location: Optional[ResolvedLocation] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UpdateDocument":
        if not isinstance(data, dict):
            raise ValidationError("Update document must be a mapping")

        labels = Labels(ClassifierLabel.from_dict(item) for item in data.get("labels") or [])
        location = data.get("location")

        return cls(
            update=MediaUpdate.from_dict(data),
            labels=labels,
            location=ResolvedLocation.from_dict(location) if location else None,
        )
