"""
Broadcast Core module for Cuecast.

This package contains the playback request model, the priority-ordered
event queue, and the playback scheduler state machine.
"""

from cuecast.broadcast_core.playback_request import PlaybackRequest, CuePriority
from cuecast.broadcast_core.event_queue import EventQueue
from cuecast.broadcast_core.errors import CueError, ResourceNotFound, PlaybackStartFailure
from cuecast.broadcast_core.playback_scheduler import (
    PlaybackScheduler,
    SchedulerState,
    QueueObserver,
    ResourceLocator,
    Player,
)

__all__ = [
    "PlaybackRequest",
    "CuePriority",
    "EventQueue",
    "CueError",
    "ResourceNotFound",
    "PlaybackStartFailure",
    "PlaybackScheduler",
    "SchedulerState",
    "QueueObserver",
    "ResourceLocator",
    "Player",
]
