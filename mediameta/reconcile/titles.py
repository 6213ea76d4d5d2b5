#!/usr/bin/env python3
"""
titles.py
--------------------
Automatic title synthesis from location, labels and capture time.

Titles are composed from the first matching rule:

1. A resolved location
   a. with a usable top label: "Label / City / Year"
      (country instead of city when the city is unknown, long,
      or already part of the label)
   b. with a place name and a city: "Name / Year" or "Name / City / Year"
   c. with a city and a country: "City / Year" or "City / Country / Year"
2. Without location, or when step 1 produced nothing:
   "Label / Year" for a known capture time, "Label" otherwise,
   and finally "Unknown" (with the local year when known).

The composed title is submitted with AUTO provenance, so a title set by a
user or by embedded metadata is never replaced.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Iterable, Optional

# --- Local imports ---
from mediameta.core.logging_manager import MediaMetaLogger, safe_logger
from mediameta.database.models import MediaRecord, Provenance
from mediameta.dataclasses import ClassifierLabel, Labels, ResolvedLocation
from mediameta.utils import txt
from .fields import FieldUpdate, set_title

TITLE_UNKNOWN = "Unknown"
TITLE_SEPARATOR = " / "

# Place names longer than these drop the city from the title
LONG_NAME_LENGTH = 45
MEDIUM_NAME_LENGTH = 20
# Cities longer than this are shown without the country
LONG_CITY_TITLE_LENGTH = 20


def _year(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return f"{value.year:04d}"


def _join(*parts: str) -> str:
    return TITLE_SEPARATOR.join(part for part in parts if part)


def _usable(label: Optional[ClassifierLabel]) -> bool:
    return label is not None and label.usable_for_title()


def location_title(
    record: MediaRecord, location: ResolvedLocation, top: Optional[ClassifierLabel]
) -> str:
    """Title built from the resolved location, empty when no rule applies."""
    year = _year(record.taken_at)

    if _usable(top):
        label = top.title()
        if location.no_city() or location.long_city() or location.city_in(label):
            return _join(label, location.country_name, year)
        return _join(label, location.city, year)

    name, city = location.name, location.city

    if name and not location.no_city():
        if (
            len(name) > LONG_NAME_LENGTH
            or len(name) > MEDIUM_NAME_LENGTH
            or location.long_city()
            or location.city_in(name)
        ):
            return _join(name, year)
        return _join(name, city, year)

    if not location.no_city() and location.country_name:
        if len(city) > LONG_CITY_TITLE_LENGTH:
            return _join(city, year)
        return _join(city, location.country_name, year)

    return ""


def fallback_title(record: MediaRecord, top: Optional[ClassifierLabel]) -> str:
    """Title from the top label, or the unknown placeholder."""
    known_time = not Provenance.coerce(record.taken_src).is_auto

    if _usable(top):
        if known_time:
            return _join(top.title(), _year(record.taken_at))
        return top.title()

    if known_time and record.taken_at_local is not None:
        return _join(TITLE_UNKNOWN, _year(record.taken_at_local))

    return TITLE_UNKNOWN


def synthesize_title(
    record: MediaRecord,
    location: Optional[ResolvedLocation] = None,
    labels: Optional[Iterable[ClassifierLabel]] = None,
    logger: Optional[MediaMetaLogger] = None,
    ranked: bool = False,
) -> FieldUpdate:
    """
    Compose a title and submit it through the title field rule.

    Args:
        record: Record to update in place
        location: Resolved location, None when the position is unknown
        labels: Classification labels of the record
        logger: Optional logger
        ranked: Labels are already in rank order, the first one is used

    Returns:
        FieldUpdate of the title; not accepted when the current title
        was set by a non-automatic source
    """
    log = safe_logger(logger)
    title_src = Provenance.coerce(record.title_src)

    if not title_src.is_auto and record.has_title():
        log.log_warning(
            "Won't update title, was modified",
            {"uid": record.uid, "title_src": title_src.value},
        )
        return FieldUpdate(record.title, title_src, False)

    top = Labels(labels).top(ranked)
    if _usable(top):
        log.log_debug("Using label for title", {"uid": record.uid, "label": top.name})

    title = ""
    if location is not None:
        title = location_title(record, location, top)
    if not title:
        title = fallback_title(record, top)

    result = set_title(record, title, Provenance.AUTO, logger)

    if result.accepted:
        log.log_info("Changed title", {"uid": record.uid, "title": txt.quote(record.title)})

    return result
