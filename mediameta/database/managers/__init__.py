#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the mediameta database.

Each manager handles one entity family and inherits from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    KeywordManager: Keyword vocabulary and per-record keyword index
    LabelManager: Label vocabulary and label associations
    MediaManager: Media records and reconciliation cycles

Usage:
    from mediameta.database.managers import MediaManager

    media_mgr = MediaManager(session, logger)
"""
from .base_manager import BaseManager
from .keyword_manager import KeywordManager
from .label_manager import LabelManager
from .media_manager import MediaManager, ReconcileResult

__all__ = [
    "BaseManager",
    "KeywordManager",
    "LabelManager",
    "MediaManager",
    "ReconcileResult",
]
