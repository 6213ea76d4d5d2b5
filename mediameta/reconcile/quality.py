#!/usr/bin/env python3
"""
quality.py
--------------------
Default quality score for media records.

Any callable ``(MediaRecord) -> int`` can replace it; the MediaManager
takes the scorer as a constructor argument.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable

# --- Local imports ---
from mediameta.database.models import MediaRecord, Provenance

QualityScorer = Callable[[MediaRecord], int]

# Labels that mark screenshots, scans and other non-photos
LOW_QUALITY_LABELS = frozenset({"screenshot", "document", "info", "text", "receipt"})
CONFIDENT_UNCERTAINTY = 50
EDITED_MIN_SCORE = 3


def default_quality_score(record: MediaRecord) -> int:
    """
    Score descriptive completeness.

    +3 favorite, +1 each for a known capture time, a position, a manual
    title or description and a confident label. Low quality labels cost 6.
    Records edited by hand never score below 3.
    """
    score = 0

    if record.favorite:
        score += 3
    if not Provenance.coerce(record.taken_src).is_auto:
        score += 1
    if record.has_lat_lng():
        score += 1
    if Provenance.coerce(record.title_src).is_manual or Provenance.coerce(
        record.description_src
    ).is_manual:
        score += 1

    slugs = {link.label.slug for link in record.labels if link.label is not None}
    if any(link.uncertainty <= CONFIDENT_UNCERTAINTY for link in record.labels):
        score += 1
    if slugs & LOW_QUALITY_LABELS:
        score -= 6

    if record.edited_at is not None and score < EDITED_MIN_SCORE:
        score = EDITED_MIN_SCORE

    return score
