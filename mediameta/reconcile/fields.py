#!/usr/bin/env python3
"""
fields.py
--------------------
Provenance-aware field reconciliation.

Every reconciled field of a MediaRecord is a (value, source) pair. A
candidate value replaces the current one only when it passes the field's
validity filter and its source has precedence:

    current source is AUTO
    or current source equals the candidate source
    or the candidate source is MANUAL

Rejected candidates leave the record untouched and are not errors. The
precedence rule is implemented once in ``try_update``; the field setters
only differ in their filters.

Usage:
    from mediameta.reconcile import fields

    result = fields.set_title(record, "Beach walk", Provenance.META)
    if result.accepted:
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, NamedTuple, Optional, Tuple

# --- Local imports ---
from mediameta.core.logging_manager import MediaMetaLogger, safe_logger
from mediameta.database.models import MONTH_UNKNOWN, YEAR_UNKNOWN, MediaRecord, Provenance
from mediameta.utils import txt

# Capture times before this year are treated as missing
MIN_PLAUSIBLE_YEAR = 1000

Validator = Callable[[Any], Any]
TakenAt = Tuple[datetime, datetime]
Coordinates = Tuple[float, float, int]


class FieldUpdate(NamedTuple):
    """
    Outcome of one reconciliation attempt.

    Attributes:
        value: The field value after the attempt
        source: The field source after the attempt
        accepted: True when the candidate replaced the current value
    """

    value: Any
    source: Provenance
    accepted: bool


def may_overwrite(current_source: Any, candidate_source: Any) -> bool:
    """True when a value from ``candidate_source`` may replace one from ``current_source``."""
    current = Provenance.coerce(current_source)
    candidate = Provenance.coerce(candidate_source)

    return current.is_auto or current == candidate or candidate.is_manual


def try_update(
    current_value: Any,
    current_source: Any,
    candidate_value: Any,
    candidate_source: Any,
    validate: Optional[Validator] = None,
    fill_empty: bool = False,
) -> FieldUpdate:
    """
    Decide between the current value and a candidate.

    Args:
        current_value: Value currently stored
        current_source: Provenance of the stored value
        candidate_value: Proposed value
        candidate_source: Provenance of the proposed value
        validate: Filter returning the cleaned candidate, or None to reject it
        fill_empty: Accept any valid candidate while the current value is empty

    Returns:
        FieldUpdate with the resulting value, source and acceptance flag
    """
    current_source = Provenance.coerce(current_source)
    candidate_source = Provenance.coerce(candidate_source)
    rejected = FieldUpdate(current_value, current_source, False)

    if validate is not None:
        candidate_value = validate(candidate_value)

    if candidate_value is None:
        return rejected

    if fill_empty and not current_value:
        return FieldUpdate(candidate_value, candidate_source, True)

    if not may_overwrite(current_source, candidate_source):
        return rejected

    return FieldUpdate(candidate_value, candidate_source, True)


# ----- Field filters -----
def clean_title(value: Any) -> Optional[str]:
    if value is None:
        return None
    return txt.clip(str(value), txt.CLIP_TITLE) or None


def clean_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    return txt.clip(str(value), txt.CLIP_DESCRIPTION) or None


def _round_seconds(value: datetime) -> datetime:
    if value.microsecond >= 500000:
        value += timedelta(seconds=1)
    return value.replace(microsecond=0)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return _round_seconds(value)


def clean_taken_at(value: Any) -> Optional[TakenAt]:
    """
    Normalize a (taken_at, taken_at_local) candidate.

    The UTC time must be present and plausible. A missing or implausible
    local time falls back to the UTC time. Aware local times keep their
    wall clock reading.
    """
    if not value:
        return None

    taken, local = value
    if taken is None or taken.year < MIN_PLAUSIBLE_YEAR:
        return None

    taken = _as_utc(taken)

    if local is None or local.year < MIN_PLAUSIBLE_YEAR:
        local = taken
    else:
        local = _round_seconds(local.replace(tzinfo=None))

    return taken, local


def clean_coordinates(value: Any) -> Optional[Coordinates]:
    """Reject the (0, 0) null position; altitude is copied as is."""
    if not value:
        return None

    lat, lng, alt = value
    if lat is None or lng is None:
        return None
    if lat == 0 and lng == 0:
        return None

    return float(lat), float(lng), int(alt or 0)


# ----- Record setters -----
def _log_rejection(
    logger: Optional[MediaMetaLogger], record: MediaRecord, field: str, source: Any
) -> None:
    safe_logger(logger).log_debug(
        f"Kept {field}",
        {"uid": record.uid, "candidate_src": str(Provenance.coerce(source).value)},
    )


def set_title(
    record: MediaRecord,
    title: Any,
    source: Any,
    logger: Optional[MediaMetaLogger] = None,
) -> FieldUpdate:
    """Reconcile the title; an empty title is always fillable."""
    result = try_update(
        record.title, record.title_src, title, source, clean_title, fill_empty=True
    )

    if result.accepted:
        record.title, record.title_src = result.value, result.source
    else:
        _log_rejection(logger, record, "title", source)

    return result


def set_description(
    record: MediaRecord,
    description: Any,
    source: Any,
    logger: Optional[MediaMetaLogger] = None,
) -> FieldUpdate:
    """Reconcile the description; an empty description is always fillable."""
    result = try_update(
        record.description,
        record.description_src,
        description,
        source,
        clean_description,
        fill_empty=True,
    )

    if result.accepted:
        record.description, record.description_src = result.value, result.source
    else:
        _log_rejection(logger, record, "description", source)

    return result


def set_taken_at(
    record: MediaRecord,
    taken_at: Optional[datetime],
    taken_at_local: Optional[datetime],
    time_zone: Optional[str],
    source: Any,
    logger: Optional[MediaMetaLogger] = None,
) -> FieldUpdate:
    """
    Reconcile the capture time.

    On acceptance both timestamps are replaced, the time zone is replaced
    when a non-empty one is given and year/month are derived again.
    """
    result = try_update(
        (record.taken_at, record.taken_at_local),
        record.taken_src,
        (taken_at, taken_at_local),
        source,
        clean_taken_at,
    )

    if not result.accepted:
        _log_rejection(logger, record, "taken_at", source)
        return result

    record.taken_at, record.taken_at_local = result.value
    record.taken_src = result.source

    if time_zone:
        record.time_zone = time_zone

    update_year_month(record)

    return result


def set_coordinates(
    record: MediaRecord,
    latitude: Optional[float],
    longitude: Optional[float],
    altitude: Optional[int],
    source: Any,
    logger: Optional[MediaMetaLogger] = None,
) -> FieldUpdate:
    """Reconcile latitude, longitude and altitude as one value."""
    result = try_update(
        (record.latitude, record.longitude, record.altitude),
        record.coordinate_src,
        (latitude, longitude, altitude),
        source,
        clean_coordinates,
    )

    if result.accepted:
        record.latitude, record.longitude, record.altitude = result.value
        record.coordinate_src = result.source
    else:
        _log_rejection(logger, record, "coordinates", source)

    return result


def update_year_month(record: MediaRecord) -> None:
    """
    Derive year and month from the local capture time.

    Both stay unknown while the capture time has only been estimated.
    """
    if record.taken_at is None or record.taken_at.year < MIN_PLAUSIBLE_YEAR:
        return

    if record.taken_at_local is None or record.taken_at_local.year < MIN_PLAUSIBLE_YEAR:
        record.taken_at_local = record.taken_at

    if Provenance.coerce(record.taken_src).is_auto:
        record.year = YEAR_UNKNOWN
        record.month = MONTH_UNKNOWN
        return

    record.year = record.taken_at_local.year
    record.month = record.taken_at_local.month
