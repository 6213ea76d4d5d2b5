"""
test_update_document.py
-----------------------
Unit tests for the value objects fed into reconciliation cycles.
"""
import pytest
from datetime import datetime, timedelta, timezone

from mediameta.core.exceptions import ValidationError
from mediameta.database.models import Provenance
from mediameta.dataclasses import (
    ClassifierLabel,
    Labels,
    MediaUpdate,
    ResolvedLocation,
    UpdateDocument,
)


class TestLabels:
    """Test Labels ranking and keyword helpers."""

    def test_ranked_by_uncertainty_then_priority(self):
        labels = Labels(
            [
                ClassifierLabel("cat", uncertainty=30, priority=1),
                ClassifierLabel("dog", uncertainty=10, priority=0),
                ClassifierLabel("pet", uncertainty=30, priority=5),
            ]
        )

        assert [label.name for label in labels.ranked()] == ["dog", "pet", "cat"]
        assert labels.top().name == "dog"

    def test_top_of_empty_list(self):
        assert Labels().top() is None
        assert Labels().top(ranked=True) is None

    def test_top_of_ranked_list_keeps_order(self):
        labels = Labels(
            [
                ClassifierLabel("cat", uncertainty=30, priority=1),
                ClassifierLabel("dog", uncertainty=10, priority=0),
            ]
        )

        assert labels.top(ranked=True).name == "cat"
        assert labels.top().name == "dog"

    def test_keywords_include_categories(self):
        labels = Labels([ClassifierLabel("golden retriever", categories=("dog", "animal"))])
        assert labels.keywords() == ["golden", "retriever", "dog", "animal"]

    def test_invalid_labels_have_no_keywords(self):
        labels = Labels([ClassifierLabel("dog", uncertainty=100)])
        assert labels.keywords() == []


class TestClassifierLabel:
    """Test ClassifierLabel."""

    def test_title(self):
        assert ClassifierLabel("golden retriever").title() == "Golden Retriever"

    @pytest.mark.parametrize(
        "uncertainty,priority,usable",
        [(85, -1, True), (86, 0, False), (0, -2, False), (0, 10, True)],
    )
    def test_usable_for_title(self, uncertainty, priority, usable):
        label = ClassifierLabel("dog", uncertainty=uncertainty, priority=priority)
        assert label.usable_for_title() is usable

    def test_blank_name_is_not_usable(self):
        assert ClassifierLabel("  ").usable_for_title() is False

    def test_from_dict(self):
        label = ClassifierLabel.from_dict(
            {"name": " dog ", "uncertainty": "15", "source": "manual", "categories": ["animal"]}
        )

        assert label == ClassifierLabel(
            "dog", Provenance.MANUAL, uncertainty=15, priority=0, categories=("animal",)
        )

    def test_from_dict_requires_name(self):
        with pytest.raises(ValidationError):
            ClassifierLabel.from_dict({"uncertainty": 10})


class TestResolvedLocation:
    """Test ResolvedLocation helpers."""

    @pytest.mark.parametrize("city,no_city", [("", True), ("Unknown", True), ("Berlin", False)])
    def test_no_city(self, city, no_city):
        assert ResolvedLocation(city=city).no_city() is no_city

    def test_long_city(self):
        assert ResolvedLocation(city="Frankfurt am Main").long_city() is True
        assert ResolvedLocation(city="Berlin").long_city() is False

    def test_keyword_list(self, berlin):
        location = berlin(name="Brandenburg Gate", keywords="landmark, gate")
        assert set(location.keyword_list()) == {
            "brandenburg", "gate", "berlin", "germany", "landmark",
        }

    def test_from_dict_accepts_country_alias(self):
        location = ResolvedLocation.from_dict({"city": "Paris", "country": "France", "country_code": "FR"})
        assert location.country_name == "France"
        assert location.country_code == "fr"


class TestMediaUpdate:
    """Test MediaUpdate.from_dict()."""

    def test_parses_values(self):
        update = MediaUpdate.from_dict(
            {
                "source": "meta",
                "title": "Beach walk",
                "taken_at": "2020-05-23T14:02:11Z",
                "latitude": "52.5",
                "longitude": 13.4,
                "details": {"keywords": "dog, beach"},
                "favorite": "yes",
            }
        )

        assert update.source is Provenance.META
        assert update.taken_at == datetime(2020, 5, 23, 14, 2, 11, tzinfo=timezone.utc)
        assert update.latitude == 52.5
        assert update.has_coordinates()
        assert update.details == {"keywords": "dog, beach"}
        assert update.favorite is True

    def test_keeps_offsets(self):
        update = MediaUpdate.from_dict({"taken_at": "2020-05-23T16:02:11+02:00"})
        assert update.taken_at.utcoffset() == timedelta(hours=2)

    def test_defaults_to_auto(self):
        update = MediaUpdate.from_dict({})
        assert update.source is Provenance.AUTO
        assert not update.has_coordinates()

    @pytest.mark.parametrize(
        "data",
        [
            {"source": "exif"},
            {"taken_at": "yesterday"},
            {"latitude": "north"},
            {"details": {"camera": "X100"}},
            {"details": "dog, beach"},
        ],
    )
    def test_invalid_values_raise(self, data):
        with pytest.raises(ValidationError):
            MediaUpdate.from_dict(data)


class TestUpdateDocument:
    """Test UpdateDocument.from_dict()."""

    def test_full_document(self):
        document = UpdateDocument.from_dict(
            {
                "source": "meta",
                "title": "Beach walk",
                "labels": [{"name": "dog", "uncertainty": 10, "priority": 2}],
                "location": {"city": "Berlin", "country_name": "Germany"},
            }
        )

        assert document.update.title == "Beach walk"
        assert document.labels == [ClassifierLabel("dog", uncertainty=10, priority=2)]
        assert document.location.city == "Berlin"

    def test_without_labels_and_location(self):
        document = UpdateDocument.from_dict({"title": "x"})
        assert document.labels == []
        assert document.location is None

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError, match="must be a mapping"):
            UpdateDocument.from_dict(["title"])
