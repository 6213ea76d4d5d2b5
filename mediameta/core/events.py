#!/usr/bin/env python3
"""
events.py
--------------------
In-process publish/subscribe hub for vocabulary notifications.

Topics published by the reconciliation engine:
    - labels.created: {"labels": [Label, ...]} when a new label row is created
    - count.labels: {"count": 1} for every new label with priority >= 0

Subscribers are plain callables receiving ``(topic, data)``. A failing
subscriber is logged and does not abort the publishing cycle.

Usage:
    hub = EventHub()
    hub.subscribe("count.labels", lambda topic, data: counter.add(data["count"]))
    hub.publish("count.labels", {"count": 1})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List, Optional

# --- Local imports ---
from .logging_manager import MediaMetaLogger, safe_logger

Subscriber = Callable[[str, Dict[str, Any]], None]

TOPIC_LABELS_CREATED = "labels.created"
TOPIC_COUNT_LABELS = "count.labels"


class EventHub:
    """Topic-based callback registry."""

    def __init__(self, logger: Optional[MediaMetaLogger] = None) -> None:
        self.logger = logger
        self._lock = threading.Lock()
        self._subscribers: DefaultDict[str, List[Subscriber]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Subscriber) -> None:
        """Register ``callback`` for ``topic``."""
        with self._lock:
            self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        with self._lock:
            if callback in self._subscribers.get(topic, []):
                self._subscribers[topic].remove(callback)

    def publish(self, topic: str, data: Dict[str, Any]) -> int:
        """
        Deliver ``data`` to every subscriber of ``topic``.

        Args:
            topic: Topic name
            data: Event payload

        Returns:
            Number of subscribers that received the event
        """
        with self._lock:
            subscribers = list(self._subscribers.get(topic, []))

        delivered = 0
        for callback in subscribers:
            try:
                callback(topic, data)
                delivered += 1
            except Exception as e:
                safe_logger(self.logger).log_error(
                    e, {"operation": "publish", "topic": topic}
                )

        safe_logger(self.logger).log_debug(
            f"Published {topic}", {"subscribers": delivered}
        )
        return delivered
