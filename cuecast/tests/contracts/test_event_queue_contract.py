"""
Contract tests for EventQueue.

Tests cover:
- Q1: Priority ordering on insert
- Q2: FIFO among equal priorities
- Q3: Head access (peek / pop)
- Q4: Locked head is never displaced
- Q5: Snapshots are copies
"""

import pytest

from cuecast.broadcast_core.event_queue import EventQueue
from cuecast.broadcast_core.playback_request import CuePriority, PlaybackRequest
from cuecast.tests.contracts.test_doubles import create_request


def _kinds(queue: EventQueue) -> list:
    return [request.kind for request in queue.snapshot()]


class TestQ1_PriorityOrdering:
    """Tests for Q1 - Priority ordering on insert."""

    def test_q1_more_urgent_request_goes_first(self, event_queue):
        """Q1: Lower priority value MUST be placed before higher values."""
        event_queue.insert(create_request("low", 9))
        event_queue.insert(create_request("high", 1))
        event_queue.insert(create_request("mid", 5))

        assert _kinds(event_queue) == ["high", "mid", "low"]

    def test_q1_inserts_before_first_strictly_greater_priority(self, event_queue):
        """Q1: New arrival MUST land before the first entry with a strictly greater priority."""
        for kind, priority in [("a", 1), ("b", 3), ("c", 3), ("d", 7)]:
            event_queue.insert(create_request(kind, priority))

        event_queue.insert(create_request("new", 3))

        assert _kinds(event_queue) == ["a", "b", "c", "new", "d"]

    def test_q1_appends_when_nothing_is_less_urgent(self, event_queue):
        """Q1: Request with the largest priority value MUST be appended."""
        event_queue.insert(create_request("a", 1))
        event_queue.insert(create_request("b", 2))
        event_queue.insert(create_request("z", 99))

        assert _kinds(event_queue) == ["a", "b", "z"]

    def test_q1_sorted_for_mixed_sequence(self, event_queue):
        """Q1: Queue MUST stay sorted by priority, then arrival, for any insert order."""
        priorities = [4, 2, 9, 2, 0, 4, 7, 0, 9, 1]
        for index, priority in enumerate(priorities):
            event_queue.insert(create_request(f"r{index}", priority))

        snapshot = event_queue.snapshot()
        expected = sorted(
            ((priority, index) for index, priority in enumerate(priorities))
        )
        assert [(r.priority, int(r.kind[1:])) for r in snapshot] == expected

    def test_q1_accepts_priority_enum(self, event_queue):
        """Q1: CuePriority values MUST order like their integer values."""
        event_queue.insert(PlaybackRequest("normal", CuePriority.NORMAL))
        event_queue.insert(PlaybackRequest("critical", CuePriority.CRITICAL))
        event_queue.insert(PlaybackRequest("plain", 15))

        assert _kinds(event_queue) == ["critical", "plain", "normal"]


class TestQ2_FifoAmongEqualPriorities:
    """Tests for Q2 - FIFO among equal priorities."""

    def test_q2_equal_priorities_keep_arrival_order(self, event_queue):
        """Q2: Equal-priority requests MUST pop in submission order."""
        for kind in ["x", "y", "z"]:
            event_queue.insert(create_request(kind, 5))

        assert [event_queue.pop_front().kind for _ in range(3)] == ["x", "y", "z"]

    def test_q2_identical_requests_get_distinct_sequences(self, event_queue):
        """Q2: Identical requests MUST each occupy their own slot."""
        first = event_queue.insert(create_request("x", 5))
        second = event_queue.insert(create_request("x", 5))

        assert second > first
        assert len(event_queue) == 2


class TestQ3_HeadAccess:
    """Tests for Q3 - Head access."""

    def test_q3_empty_queue(self, event_queue):
        """Q3: Empty queue MUST report empty and return None from peek/pop."""
        assert event_queue.is_empty
        assert len(event_queue) == 0
        assert event_queue.peek_front() is None
        assert event_queue.peek_sequence() is None
        assert event_queue.pop_front() is None

    def test_q3_peek_does_not_mutate(self, event_queue):
        """Q3: peek_front MUST NOT remove the head."""
        event_queue.insert(create_request("a", 1))

        assert event_queue.peek_front().kind == "a"
        assert event_queue.peek_front().kind == "a"
        assert len(event_queue) == 1

    def test_q3_pop_returns_head(self, event_queue):
        """Q3: pop_front MUST remove and return the head."""
        event_queue.insert(create_request("b", 2))
        event_queue.insert(create_request("a", 1))

        assert event_queue.pop_front().kind == "a"
        assert _kinds(event_queue) == ["b"]

    def test_q3_peek_sequence_matches_insert(self, event_queue):
        """Q3: peek_sequence MUST return the sequence assigned to the head."""
        event_queue.insert(create_request("b", 2))
        sequence = event_queue.insert(create_request("a", 1))

        assert event_queue.peek_sequence() == sequence


class TestQ4_LockedHead:
    """Tests for Q4 - Locked head is never displaced."""

    def test_q4_urgent_insert_goes_after_locked_head(self, event_queue):
        """Q4: With the head locked, a more urgent request MUST be placed right after it."""
        event_queue.insert(create_request("playing", 5))
        event_queue.insert(create_request("pending", 5))
        event_queue.lock_head()

        event_queue.insert(create_request("urgent", 1))

        assert _kinds(event_queue) == ["playing", "urgent", "pending"]

    def test_q4_pop_releases_lock(self, event_queue):
        """Q4: pop_front MUST release the head lock."""
        event_queue.insert(create_request("playing", 5))
        event_queue.insert(create_request("pending", 5))
        event_queue.lock_head()

        event_queue.pop_front()
        event_queue.insert(create_request("urgent", 1))

        assert not event_queue.head_locked
        assert _kinds(event_queue) == ["urgent", "pending"]

    def test_q4_release_head_unlocks(self, event_queue):
        """Q4: release_head MUST allow the head to be displaced again."""
        event_queue.insert(create_request("stalled", 5))
        event_queue.lock_head()
        event_queue.release_head()

        event_queue.insert(create_request("urgent", 1))

        assert _kinds(event_queue) == ["urgent", "stalled"]

    def test_q4_lock_on_empty_queue_is_noop(self, event_queue):
        """Q4: Locking an empty queue MUST NOT lock anything."""
        event_queue.lock_head()

        assert not event_queue.head_locked


class TestQ5_Snapshots:
    """Tests for Q5 - Snapshots are copies."""

    def test_q5_snapshot_is_immutable_copy(self, event_queue):
        """Q5: Snapshot MUST NOT change when the queue changes afterwards."""
        event_queue.insert(create_request("a", 1))
        snapshot = event_queue.snapshot()

        event_queue.insert(create_request("b", 2))

        assert isinstance(snapshot, tuple)
        assert [r.kind for r in snapshot] == ["a"]

    def test_q5_dump_lists_every_entry(self, event_queue):
        """Q5: dump MUST describe every entry in order."""
        event_queue.insert(create_request("a", 1))
        event_queue.insert(create_request("b", 2))

        dump = event_queue.dump()

        assert len(dump) == 2
        assert "'a'" in dump[0]
        assert "priority=2" in dump[1]


def test_requests_are_value_types():
    """PlaybackRequest MUST compare by value and be immutable."""
    request = PlaybackRequest("a", 1)

    assert request == PlaybackRequest("a", 1)
    with pytest.raises(Exception):
        request.priority = 2
