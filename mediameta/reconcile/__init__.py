"""
Reconciliation Package
----------------------

Pure reconciliation rules applied to MediaRecord instances.

- fields: Provenance precedence and per-field filters
- titles: Title synthesis from location, labels and capture time
- folders: Folder titles from date/description paths
- locks: Per-record cycle serialization
- quality: Default quality scorer

Persistence (keyword and label associations) lives in
mediameta.database.managers.
"""
from .fields import (
    FieldUpdate,
    may_overwrite,
    set_coordinates,
    set_description,
    set_taken_at,
    set_title,
    try_update,
    update_year_month,
)
from .folders import Folder, folder_title
from .locks import RecordLocks
from .quality import QualityScorer, default_quality_score
from .titles import TITLE_UNKNOWN, synthesize_title

__all__ = [
    "FieldUpdate",
    "Folder",
    "QualityScorer",
    "RecordLocks",
    "TITLE_UNKNOWN",
    "default_quality_score",
    "folder_title",
    "may_overwrite",
    "set_coordinates",
    "set_description",
    "set_taken_at",
    "set_title",
    "synthesize_title",
    "try_update",
    "update_year_month",
]
