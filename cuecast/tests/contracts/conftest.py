"""
Shared pytest fixtures for Cuecast contract tests.

Contract tests use test doubles (fakes, stubs, mocks) to avoid real dependencies.
No real audio output or network access is used.
"""

import pytest

from cuecast.broadcast_core.event_queue import EventQueue
from cuecast.broadcast_core.playback_scheduler import PlaybackScheduler
from cuecast.tests.contracts.test_doubles import (
    FakeResourceLocator,
    RecordingObserver,
    RecordingPlayer,
)

KNOWN_KINDS = ["a", "b", "c", "d", "x", "y", "first", "second", "bad_file"]


@pytest.fixture
def event_queue():
    """Create an empty EventQueue."""
    return EventQueue()


@pytest.fixture
def fake_locator():
    """Create a locator that knows the standard test kinds."""
    return FakeResourceLocator(KNOWN_KINDS)


@pytest.fixture
def recording_player():
    """Create a player that finishes only when the test says so."""
    return RecordingPlayer()


@pytest.fixture
def recording_observer():
    """Create an observer that records every queue snapshot."""
    return RecordingObserver()


@pytest.fixture
def scheduler(fake_locator, recording_player, recording_observer):
    """Create a scheduler with the stalling failed-head policy."""
    return PlaybackScheduler(
        locator=fake_locator,
        player=recording_player,
        observers=[recording_observer],
    )


@pytest.fixture
def skipping_scheduler(fake_locator, recording_player, recording_observer):
    """Create a scheduler that skips heads that fail to start."""
    return PlaybackScheduler(
        locator=fake_locator,
        player=recording_player,
        observers=[recording_observer],
        skip_failed_head=True,
    )
