"""
resolved_location.py
--------------------
Reverse geocoding result as consumed by the title synthesizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from mediameta.utils import txt

UNKNOWN_CITY = "Unknown"

# Cities longer than this are replaced by the country in label titles
LONG_CITY_LENGTH = 16


@dataclass(frozen=True)
class ResolvedLocation:
    """
    A place resolved from coordinates.

    Attributes:
        name: Name of the place (venue, landmark, street), may be empty
        city: City name, empty or "Unknown" when not resolved
        state: State or province
        country_code: ISO 3166-1 alpha-2 code
        country_name: Country display name
        keywords: Comma-separated keywords supplied by the geocoder
    """

    name: str = ""
    city: str = ""
    state: str = ""
    country_code: str = ""
    country_name: str = ""
    keywords: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolvedLocation":
        """Build a location from a mapping such as a parsed YAML item."""
        return cls(
            name=str(data.get("name") or "").strip(),
            city=str(data.get("city") or "").strip(),
            state=str(data.get("state") or "").strip(),
            country_code=str(data.get("country_code") or "").strip().lower(),
            country_name=str(data.get("country_name") or data.get("country") or "").strip(),
            keywords=str(data.get("keywords") or "").strip(),
        )

    @classmethod
    def from_record(cls, record: Any) -> "ResolvedLocation":
        """Rebuild the place stored on a media record."""
        return cls(
            name=record.place_name,
            city=record.place_city,
            state=record.place_state,
            country_code=record.place_country_code,
            country_name=record.place_country,
        )

    def no_city(self) -> bool:
        return self.city == "" or self.city == UNKNOWN_CITY

    def long_city(self) -> bool:
        return len(self.city) > LONG_CITY_LENGTH

    def city_in(self, text: str) -> bool:
        """True when the city name already appears in ``text``."""
        return bool(self.city) and self.city in text

    def keyword_list(self) -> List[str]:
        """Keywords of the place name, city, state, country and geocoder keywords."""
        result: List[str] = []
        for value in (self.name, self.city, self.state, self.country_name, self.keywords):
            result.extend(txt.keywords(value))
        return result
