"""
dataclasses package
-------------------
Plain value objects consumed by the reconciliation engine.

- ClassifierLabel / Labels: ranked image classification output
- ResolvedLocation: reverse geocoding result
- MediaUpdate: candidate field values with their provenance
"""
from mediameta.dataclasses.classifier_label import ClassifierLabel, Labels
from mediameta.dataclasses.media_update import MediaUpdate, UpdateDocument
from mediameta.dataclasses.resolved_location import ResolvedLocation

__all__ = ["ClassifierLabel", "Labels", "MediaUpdate", "ResolvedLocation", "UpdateDocument"]
