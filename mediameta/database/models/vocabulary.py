"""
Vocabulary Models
------------------

Shared, record-independent entities referenced by media associations.

Models:
    - Keyword: Normalized search token (unique text, optional skip flag)
    - Label: Classification label keyed by (slug, priority)

Both are created through idempotent find-or-create helpers in the
KeywordManager and LabelManager and are safe to share across records.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, List, Optional

# --- Third party imports ---
from sqlalchemy import Boolean, CheckConstraint, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from mediameta.utils.txt import CLIP_KEYWORD, CLIP_LABEL
from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .associations import MediaKeyword, MediaLabel


class Keyword(Base):
    """
    Lowercase search keyword.

    Attributes:
        id: Primary key
        keyword: The keyword text (unique, lowercase)
        skip: True for stop words and blocked keywords; skipped keywords
            exist in the table but are never associated with media

    Relationships:
        media_links: One-to-many with MediaKeyword
    """

    __tablename__ = "keywords"
    __table_args__ = (CheckConstraint("keyword != ''", name="ck_keyword_non_empty"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    keyword: Mapped[str] = mapped_column(
        String(CLIP_KEYWORD), unique=True, nullable=False, index=True
    )
    skip: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    media_links: Mapped[List["MediaKeyword"]] = relationship(
        "MediaKeyword", back_populates="keyword", cascade="all, delete-orphan"
    )

    @property
    def usage_count(self) -> int:
        """Number of media records indexed with this keyword."""
        return len(self.media_links)

    def __repr__(self) -> str:
        return f"<Keyword(id={self.id}, keyword='{self.keyword}', skip={self.skip})>"

    def __str__(self) -> str:
        return self.keyword


class Label(Base, TimestampMixin):
    """
    Classification label.

    Labels are keyed by slug and priority: the classifier may report the
    same name at different specificity levels and each is kept apart.

    Attributes:
        id: Primary key
        slug: Normalized name used for lookup
        label_name: Display name (title-cased)
        priority: Higher is more specific/preferred; negative priorities
            are generic labels that do not count towards label totals
        description: Optional editorial notes

    Relationships:
        media_links: One-to-many with MediaLabel
    """

    __tablename__ = "labels"
    __table_args__ = (
        CheckConstraint("slug != ''", name="ck_label_non_empty_slug"),
        UniqueConstraint("slug", "priority", name="uq_label_slug_priority"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(CLIP_LABEL), nullable=False, index=True)
    label_name: Mapped[str] = mapped_column(String(CLIP_LABEL), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    media_links: Mapped[List["MediaLabel"]] = relationship(
        "MediaLabel", back_populates="label", cascade="all, delete-orphan"
    )

    @property
    def usage_count(self) -> int:
        """Number of media records carrying this label."""
        return len(self.media_links)

    def __repr__(self) -> str:
        return f"<Label(id={self.id}, slug='{self.slug}', priority={self.priority})>"

    def __str__(self) -> str:
        return self.label_name
