"""
Database Models Package
------------------------

SQLAlchemy ORM models for the mediameta database.

- base: Base class and mixins
- enums: Provenance
- vocabulary: Keyword, Label
- associations: MediaKeyword, MediaLabel
- media: MediaRecord, MediaDetails, ShareLink

Usage:
    from mediameta.database.models import MediaRecord, Keyword, Provenance
"""
# Base classes
from .base import Base, SoftDeleteMixin, TimestampMixin

# Enumerations
from .enums import Provenance

# Vocabulary
from .vocabulary import Keyword, Label

# Associations
from .associations import MediaKeyword, MediaLabel

# Media
from .media import (
    MONTH_UNKNOWN,
    YEAR_UNKNOWN,
    MediaDetails,
    MediaRecord,
    ShareLink,
    new_uid,
)

__all__ = [
    # Base
    "Base",
    "SoftDeleteMixin",
    "TimestampMixin",
    # Enums
    "Provenance",
    # Vocabulary
    "Keyword",
    "Label",
    # Associations
    "MediaKeyword",
    "MediaLabel",
    # Media
    "MediaRecord",
    "MediaDetails",
    "ShareLink",
    "new_uid",
    "YEAR_UNKNOWN",
    "MONTH_UNKNOWN",
]
