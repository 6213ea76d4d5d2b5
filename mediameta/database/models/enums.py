"""
Enumeration Types
------------------

Enum classes for the mediameta database models.

Enums:
    - Provenance: Which actor or pipeline last set a field value

Provenance is stored next to every reconciled field (title, description,
capture time, coordinates) and on every media/label association.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import Any, List

# --- Local imports ---
from mediameta.core.exceptions import ValidationError


class Provenance(str, Enum):
    """
    Closed set of data sources.

    - AUTO: Default/derived value; any other source may replace it
    - MANUAL: User edit; replaces everything and is only replaced by itself
    - META: Embedded file metadata (EXIF, QuickTime, ...)
    - XMP: Sidecar metadata files
    - NAME: Derived from the file or folder name
    - LOCATION: Reverse geocoding
    - IMAGE: Automatic image classification

    Among the non-manual, non-auto sources a field keeps its current source:
    META cannot replace a value set by LOCATION and vice versa.
    """

    AUTO = "auto"
    MANUAL = "manual"
    META = "meta"
    XMP = "xmp"
    NAME = "name"
    LOCATION = "location"
    IMAGE = "image"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available provenance tags."""
        return [source.value for source in cls]

    @classmethod
    def coerce(cls, value: Any) -> "Provenance":
        """
        Convert a tag string (or Provenance) to a Provenance member.

        None and empty strings map to AUTO.

        Raises:
            ValidationError: If the tag is unknown
        """
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.AUTO
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValidationError(
            f"Unknown provenance: {value!r} (expected one of {', '.join(cls.choices())})"
        )

    @property
    def is_auto(self) -> bool:
        return self is Provenance.AUTO

    @property
    def is_manual(self) -> bool:
        return self is Provenance.MANUAL

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            Provenance.AUTO: "Automatic",
            Provenance.MANUAL: "Manual",
            Provenance.META: "Embedded Metadata",
            Provenance.XMP: "XMP Sidecar",
            Provenance.NAME: "File Name",
            Provenance.LOCATION: "Geocoder",
            Provenance.IMAGE: "Image Classifier",
        }
        return display_map.get(self, self.value.title())
