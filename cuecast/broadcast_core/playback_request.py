"""
Playback Request Model for Cuecast.

Defines the PlaybackRequest value type submitted to the scheduler.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Hashable, Union


class CuePriority(IntEnum):
    """
    Common priority levels. Lower value plays first.

    Plain integers are accepted anywhere a priority is expected; these
    names just give the usual levels a spelling.
    """
    CRITICAL = 0
    HIGH = 10
    NORMAL = 20
    LOW = 30


@dataclass(frozen=True)
class PlaybackRequest:
    """
    One queued unit of work: "play this clip".

    The arrival order used for tie-breaking is assigned by the EventQueue
    at insertion time and is not part of the request.

    Attributes:
        kind: Opaque identifier of the clip; the resource locator turns it
              into a playable resource handle
        priority: Lower value = more urgent
    """
    kind: Hashable
    priority: Union[int, CuePriority] = CuePriority.NORMAL
