"""
classifier_label.py
-------------------
Image classification output as consumed by the reconciliation engine.

The classifier itself runs elsewhere; it hands over a list of labels with
a priority (higher is more specific) and an uncertainty (0 is certain,
100 is no confidence at all).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from mediameta.core.validators import DataValidator
from mediameta.database.models.enums import Provenance
from mediameta.utils import txt

# A label is good enough for titles above this priority and below this uncertainty
LABEL_MIN_PRIORITY = -1
LABEL_MAX_UNCERTAINTY = 85

# Uncertainty at or above this value carries no information
UNCERTAINTY_INVALID = 100


@dataclass(frozen=True)
class ClassifierLabel:
    """
    One classification result.

    Attributes:
        name: Label name as reported by the classifier
        source: Provenance of the label (usually IMAGE)
        uncertainty: 0..100, lower is more confident
        priority: Higher is more specific/preferred
        categories: Broader category names (indexed as keywords)
    """

    name: str
    source: Provenance = Provenance.IMAGE
    uncertainty: int = 0
    priority: int = 0
    categories: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassifierLabel":
        """Build a label from a mapping such as a parsed YAML item."""
        DataValidator.validate_required_fields(data, ["name"])
        return cls(
            name=str(data["name"]).strip(),
            source=Provenance.coerce(data.get("source", Provenance.IMAGE)),
            uncertainty=DataValidator.normalize_int(data.get("uncertainty")) or 0,
            priority=DataValidator.normalize_int(data.get("priority")) or 0,
            categories=tuple(data.get("categories") or ()),
        )

    def title(self) -> str:
        """Display name, title-cased and clipped."""
        return txt.title(txt.clip(self.name, txt.CLIP_LABEL))

    def usable_for_title(self) -> bool:
        """True when the label is specific and confident enough to name a photo."""
        return (
            bool(self.name.strip())
            and self.priority >= LABEL_MIN_PRIORITY
            and self.uncertainty <= LABEL_MAX_UNCERTAINTY
        )


class Labels(List[ClassifierLabel]):
    """Label list with ranking and keyword helpers."""

    def __init__(self, items: Optional[Iterable[ClassifierLabel]] = None) -> None:
        super().__init__(items or [])

    def ranked(self) -> "Labels":
        """Most confident first; ties broken by higher priority."""
        return Labels(sorted(self, key=lambda label: (label.uncertainty, -label.priority)))

    def top(self, ranked: bool = False) -> Optional[ClassifierLabel]:
        """
        The best label, or None for an empty list.

        The list is ranked first unless ``ranked`` is set, in which case
        its current order is trusted and the first label is returned.
        """
        if not self:
            return None
        if ranked:
            return self[0]
        return self.ranked()[0]

    def keywords(self) -> List[str]:
        """Keywords of label names and categories; invalid labels are ignored."""
        result: List[str] = []
        for label in self:
            if label.uncertainty >= UNCERTAINTY_INVALID:
                continue
            result.extend(txt.keywords(label.name))
            for category in label.categories:
                result.extend(txt.keywords(category))
        return result
