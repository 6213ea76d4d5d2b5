"""
test_locks.py
-------------
Unit tests for per-record cycle serialization.
"""
import pytest
import threading
import time

from mediameta.reconcile.locks import RecordLocks


class TestRecordLocks:
    """Test RecordLocks."""

    def test_lock_lives_while_held(self):
        locks = RecordLocks()

        with locks.hold("m1"):
            assert locks.is_held("m1")
            assert not locks.is_held("m2")
            assert len(locks) == 1

        assert not locks.is_held("m1")
        assert len(locks) == 0

    def test_different_uids_held_together(self):
        locks = RecordLocks()

        with locks.hold("m1"), locks.hold("m2"):
            assert len(locks) == 2

        assert len(locks) == 0

    def test_hold_is_reentrant(self):
        """A cycle may take its own record lock again."""
        locks = RecordLocks()

        with locks.hold("m1"):
            with locks.hold("m1"):
                assert len(locks) == 1
            assert locks.is_held("m1")

        assert len(locks) == 0

    def test_released_after_error(self):
        locks = RecordLocks()

        with pytest.raises(RuntimeError):
            with locks.hold("m1"):
                raise RuntimeError("cycle failed")

        assert len(locks) == 0
        with locks.hold("m1"):
            assert locks.is_held("m1")

    def test_registry_does_not_grow(self):
        """Sequential cycles on many records leave no locks behind."""
        locks = RecordLocks()

        for i in range(100):
            with locks.hold(f"m{i}"):
                pass

        assert len(locks) == 0

    def test_cycles_on_same_record_do_not_interleave(self):
        """Blocks holding the same uid run one after the other."""
        locks = RecordLocks()
        trace = []

        def cycle(name):
            with locks.hold("m1"):
                trace.append(f"{name}-start")
                time.sleep(0.01)
                trace.append(f"{name}-end")

        threads = [threading.Thread(target=cycle, args=(f"t{i}",)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(trace) == 8
        for i in range(0, 8, 2):
            assert trace[i].endswith("-start")
            assert trace[i + 1] == trace[i].replace("-start", "-end")
        assert len(locks) == 0
