#!/usr/bin/env python3
"""
locks.py
--------------------
Per-record serialization of reconciliation cycles.

Two cycles on the same record must not interleave; cycles on different
records run freely. Locks are reentrant so a cycle may call helpers that
take the same lock again.

A lock only lives while some thread holds or waits for it, so the
registry stays as small as the number of records in flight.

Usage:
    locks = RecordLocks()
    with locks.hold(record.uid):
        manager.reconcile(record, update)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator


@dataclass
class _Entry:
    lock: threading.RLock = field(default_factory=threading.RLock)
    holders: int = 0


class RecordLocks:
    """Registry handing out one reentrant lock per record uid."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[str, _Entry] = {}

    @contextmanager
    def hold(self, uid: str) -> Iterator[None]:
        """Hold the lock of ``uid`` for the duration of the block."""
        with self._guard:
            entry = self._entries.get(uid)
            if entry is None:
                entry = self._entries[uid] = _Entry()
            entry.holders += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[uid]

    def is_held(self, uid: str) -> bool:
        """True while a thread holds or waits for the lock of ``uid``."""
        with self._guard:
            return uid in self._entries

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
