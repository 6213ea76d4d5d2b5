"""
Media Models
------------

The reconciled media entity and its one-to-one / one-to-many children.

Models:
    - MediaRecord: Descriptive metadata with per-field provenance
    - MediaDetails: Free-text detail fields feeding the keyword index
    - ShareLink: Public share tokens, removed with the record

Every provenance-tracked field is stored as a (value, source) pair:

    title / title_src
    description / description_src
    taken_at, taken_at_local, time_zone / taken_src
    latitude, longitude, altitude / coordinate_src

The pairs are only written through the field reconciler
(mediameta.reconcile.fields), never assigned one half at a time.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import secrets
from datetime import datetime
from typing import TYPE_CHECKING, Any, List, Optional, Set

# --- Third party imports ---
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from mediameta.utils.txt import CLIP_TITLE
from .base import Base, SoftDeleteMixin, TimestampMixin
from .enums import Provenance

if TYPE_CHECKING:
    from .associations import MediaKeyword, MediaLabel

YEAR_UNKNOWN = -1
MONTH_UNKNOWN = -1

UID_PREFIX = "m"


def new_uid(prefix: str = UID_PREFIX) -> str:
    """Random public identifier, e.g. 'm3f9c0a1b2d4e5f60'."""
    return f"{prefix}{secrets.token_hex(8)}"


def _provenance_column() -> Any:
    return mapped_column(
        SQLEnum(Provenance, values_callable=lambda x: [e.value for e in x]),
        default=Provenance.AUTO,
        nullable=False,
    )


class MediaRecord(Base, TimestampMixin, SoftDeleteMixin):
    """
    A media item with reconciled descriptive metadata.

    Attributes:
        id: Primary key
        uid: Public identifier (unique)
        title, title_src: Title and its provenance
        description, description_src: Description and its provenance
        taken_at: Capture time in UTC (naive)
        taken_at_local: Capture time in the local time zone (naive)
        time_zone: IANA time zone name, empty when unknown
        taken_src: Provenance of the capture time
        latitude, longitude, altitude, coordinate_src: Position and provenance
        place_*: Place resolved for the position, empty until geocoded
        year, month: Derived from taken_at_local, -1 while taken_src is AUTO
        quality: Derived quality score
        favorite, private: User flags
        edited_at: Last manual edit

    Relationships:
        details: One-to-one with MediaDetails
        keyword_links: One-to-many with MediaKeyword
        labels: One-to-many with MediaLabel (ordered by uncertainty)
        links: One-to-many with ShareLink
    """

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    uid: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, index=True)

    # ---- Reconciled fields ----
    title: Mapped[str] = mapped_column(String(CLIP_TITLE), default="", nullable=False)
    title_src: Mapped[Provenance] = _provenance_column()
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    description_src: Mapped[Provenance] = _provenance_column()

    taken_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    taken_at_local: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    time_zone: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    taken_src: Mapped[Provenance] = _provenance_column()

    latitude: Mapped[float] = mapped_column(Float, default=0.0, nullable=False, index=True)
    longitude: Mapped[float] = mapped_column(Float, default=0.0, nullable=False, index=True)
    altitude: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    coordinate_src: Mapped[Provenance] = _provenance_column()

    # ---- Place resolved for the current position ----
    place_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    place_city: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    place_state: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    place_country_code: Mapped[str] = mapped_column(String(8), default="", nullable=False)
    place_country: Mapped[str] = mapped_column(String(255), default="", nullable=False)

    # ---- Derived fields ----
    year: Mapped[int] = mapped_column(Integer, default=YEAR_UNKNOWN, nullable=False, index=True)
    month: Mapped[int] = mapped_column(Integer, default=MONTH_UNKNOWN, nullable=False)
    quality: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # ---- Flags ----
    favorite: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    private: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    edited_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # ---- Relationships ----
    details: Mapped[Optional["MediaDetails"]] = relationship(
        "MediaDetails",
        back_populates="media",
        uselist=False,
        cascade="all, delete-orphan",
    )
    keyword_links: Mapped[List["MediaKeyword"]] = relationship(
        "MediaKeyword", back_populates="media", cascade="all, delete-orphan"
    )
    labels: Mapped[List["MediaLabel"]] = relationship(
        "MediaLabel",
        back_populates="media",
        cascade="all, delete-orphan",
        order_by="MediaLabel.uncertainty",
    )
    links: Mapped[List["ShareLink"]] = relationship(
        "ShareLink", back_populates="media", cascade="all, delete-orphan"
    )

    _DEFAULTS = {
        "title": "",
        "title_src": Provenance.AUTO,
        "description": "",
        "description_src": Provenance.AUTO,
        "time_zone": "",
        "taken_src": Provenance.AUTO,
        "latitude": 0.0,
        "longitude": 0.0,
        "altitude": 0,
        "coordinate_src": Provenance.AUTO,
        "place_name": "",
        "place_city": "",
        "place_state": "",
        "place_country_code": "",
        "place_country": "",
        "year": YEAR_UNKNOWN,
        "month": MONTH_UNKNOWN,
        "quality": 0,
        "favorite": False,
        "private": False,
    }

    def __init__(self, **kwargs: Any) -> None:
        # Column defaults only apply on flush
        for key, value in self._DEFAULTS.items():
            kwargs.setdefault(key, value)
        kwargs.setdefault("uid", new_uid())
        super().__init__(**kwargs)

    # ---- State checks ----
    def has_id(self) -> bool:
        """True once the record has a database id and a uid."""
        return self.id is not None and self.id > 0 and bool(self.uid)

    def has_title(self) -> bool:
        return bool(self.title)

    def has_description(self) -> bool:
        return bool(self.description)

    def has_lat_lng(self) -> bool:
        """True when at least one coordinate is set."""
        return self.latitude != 0 or self.longitude != 0

    def has_place(self) -> bool:
        """True when a resolved place is stored for the current position."""
        return bool(self.place_city or self.place_name or self.place_country)

    def details_loaded(self) -> bool:
        """True when the details row exists and belongs to this record."""
        return self.details is not None and self.details.media is self

    @property
    def keyword_names(self) -> Set[str]:
        """Indexed keyword strings."""
        return {link.keyword.keyword for link in self.keyword_links if link.keyword}

    def __repr__(self) -> str:
        return f"<MediaRecord(id={self.id}, uid='{self.uid}', title='{self.title}')>"

    def __str__(self) -> str:
        return self.title or self.uid


class MediaDetails(Base):
    """
    Free-text detail fields of a media record.

    Attributes:
        media_id: Primary key and foreign key to MediaRecord
        keywords: Comma-separated keywords (normalized on save)
        subject: Subject line from embedded metadata
        artist: Artist / creator
        copyright: Copyright notice
        notes: Free-form notes (not indexed)
    """

    __tablename__ = "media_details"

    media_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("media.id", ondelete="CASCADE"), primary_key=True
    )
    keywords: Mapped[str] = mapped_column(Text, default="", nullable=False)
    subject: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    artist: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    copyright: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)

    media: Mapped["MediaRecord"] = relationship("MediaRecord", back_populates="details")

    def __init__(self, **kwargs: Any) -> None:
        for key in ("keywords", "subject", "artist", "copyright", "notes"):
            kwargs.setdefault(key, "")
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<MediaDetails(media_id={self.media_id})>"


class ShareLink(Base, TimestampMixin):
    """Share token granting access to a single media record."""

    __tablename__ = "share_links"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    media_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("media.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    media: Mapped["MediaRecord"] = relationship("MediaRecord", back_populates="links")

    def __repr__(self) -> str:
        return f"<ShareLink(id={self.id}, media_id={self.media_id})>"
