"""
test_quality.py
---------------
Unit tests for the default quality scorer.
"""
from datetime import datetime

from mediameta.database.models import Label, MediaLabel, MediaRecord, Provenance
from mediameta.reconcile.quality import default_quality_score


def _attach(record, slug, uncertainty):
    link = MediaLabel(
        label=Label(slug=slug, label_name=slug.title(), priority=0),
        uncertainty=uncertainty,
        label_src=Provenance.IMAGE,
    )
    record.labels.append(link)
    return link


class TestDefaultQualityScore:
    """Test default_quality_score()."""

    def test_new_record_scores_zero(self):
        assert default_quality_score(MediaRecord()) == 0

    def test_descriptive_fields_add_points(self):
        record = MediaRecord(
            favorite=True,
            taken_src=Provenance.META,
            latitude=52.5,
            longitude=13.4,
            title_src=Provenance.MANUAL,
        )
        _attach(record, "dog", 10)

        assert default_quality_score(record) == 7

    def test_uncertain_labels_add_nothing(self):
        record = MediaRecord()
        _attach(record, "dog", 80)

        assert default_quality_score(record) == 0

    def test_low_quality_label_penalty(self):
        record = MediaRecord(taken_src=Provenance.META)
        _attach(record, "screenshot", 10)

        assert default_quality_score(record) == -4

    def test_edited_records_score_at_least_three(self):
        record = MediaRecord(edited_at=datetime(2021, 1, 1))
        _attach(record, "screenshot", 10)

        assert default_quality_score(record) == 3
