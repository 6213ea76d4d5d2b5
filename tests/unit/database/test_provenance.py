"""
test_provenance.py
------------------
Unit tests for the Provenance enum.
"""
import pytest

from mediameta.core.exceptions import ValidationError
from mediameta.database.models import Provenance


class TestProvenanceCoerce:
    """Test Provenance.coerce()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Provenance.META, Provenance.META),
            ("meta", Provenance.META),
            (" MANUAL ", Provenance.MANUAL),
            ("location", Provenance.LOCATION),
            (None, Provenance.AUTO),
            ("", Provenance.AUTO),
        ],
    )
    def test_known_values(self, value, expected):
        assert Provenance.coerce(value) is expected

    @pytest.mark.parametrize("value", ["exif", 3, object()])
    def test_unknown_values_raise(self, value):
        with pytest.raises(ValidationError, match="Unknown provenance"):
            Provenance.coerce(value)


class TestProvenanceProperties:
    """Test the classification helpers."""

    def test_only_auto_is_auto(self):
        assert [p for p in Provenance if p.is_auto] == [Provenance.AUTO]

    def test_only_manual_is_manual(self):
        assert [p for p in Provenance if p.is_manual] == [Provenance.MANUAL]

    def test_choices_are_values(self):
        assert "auto" in Provenance.choices()
        assert "image" in Provenance.choices()
        assert len(Provenance.choices()) == len(Provenance)

    def test_display_names(self):
        assert Provenance.LOCATION.display_name == "Geocoder"
        assert Provenance.MANUAL.display_name == "Manual"
