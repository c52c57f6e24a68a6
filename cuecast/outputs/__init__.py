"""
Outputs module for Cuecast.

This package contains the playback backends the scheduler drives and the
queue observers that forward queue changes elsewhere.
"""

from .base_player import BasePlayer
from .null_player import NullPlayer
from .ffplay_player import FFplayPlayer
from .queue_webhook import QueueWebhookObserver
from .factory import create_player

__all__ = [
    "BasePlayer",
    "NullPlayer",
    "FFplayPlayer",
    "QueueWebhookObserver",
    "create_player",
]
