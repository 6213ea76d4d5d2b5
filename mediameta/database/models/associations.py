"""
Association Objects
-------------------

Join rows between media records and vocabulary entities.

- MediaKeyword: pure (media, keyword) pair, rebuilt by every reindex
- MediaLabel: (media, label) pair carrying the best uncertainty observed
  and the provenance of that observation

Both use composite primary keys, so find-or-create of a pair is
idempotent and a duplicate insert fails with an IntegrityError.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING

# --- Third party imports ---
from sqlalchemy import CheckConstraint, ForeignKey, Integer, SmallInteger
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .base import Base
from .enums import Provenance

if TYPE_CHECKING:
    from .media import MediaRecord
    from .vocabulary import Keyword, Label


class MediaKeyword(Base):
    """Keyword indexed for a media record."""

    __tablename__ = "media_keywords"

    media_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("media.id", ondelete="CASCADE"), primary_key=True
    )
    keyword_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("keywords.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    media: Mapped["MediaRecord"] = relationship("MediaRecord", back_populates="keyword_links")
    keyword: Mapped["Keyword"] = relationship("Keyword", back_populates="media_links")

    def __repr__(self) -> str:
        return f"<MediaKeyword(media_id={self.media_id}, keyword_id={self.keyword_id})>"


class MediaLabel(Base):
    """
    Label attached to a media record.

    Attributes:
        media_id: Foreign key to MediaRecord
        label_id: Foreign key to Label
        uncertainty: 0 (certain) to 100 (no confidence)
        label_src: Provenance of the stored uncertainty
    """

    __tablename__ = "media_labels"
    __table_args__ = (
        CheckConstraint(
            "uncertainty >= 0 AND uncertainty <= 100", name="ck_media_label_uncertainty"
        ),
    )

    media_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("media.id", ondelete="CASCADE"), primary_key=True
    )
    label_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("labels.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    uncertainty: Mapped[int] = mapped_column(SmallInteger, default=100, nullable=False)
    label_src: Mapped[Provenance] = mapped_column(
        SQLEnum(Provenance, values_callable=lambda x: [e.value for e in x]),
        default=Provenance.AUTO,
        nullable=False,
    )

    media: Mapped["MediaRecord"] = relationship("MediaRecord", back_populates="labels")
    label: Mapped["Label"] = relationship("Label", back_populates="media_links")

    def __repr__(self) -> str:
        return (
            f"<MediaLabel(media_id={self.media_id}, label_id={self.label_id}, "
            f"uncertainty={self.uncertainty}, src='{self.label_src.value}')>"
        )
