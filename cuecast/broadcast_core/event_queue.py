"""
Event Queue for Cuecast.

Priority-ordered queue of PlaybackRequests, FIFO among equal priorities.
"""

import itertools
import logging
from typing import List, Optional, Tuple

from cuecast.broadcast_core.playback_request import PlaybackRequest

logger = logging.getLogger(__name__)


class EventQueue:
    """
    Ordered queue of PlaybackRequests with arrival sequence tracking.

    Stores (sequence, PlaybackRequest) tuples. Entries are kept sorted by
    priority (lowest value first) and, within one priority, by sequence.
    The head may be locked while it is being played; a locked head is never
    displaced by later inserts.
    """

    def __init__(self):
        """Initialize an empty event queue."""
        self._entries: List[Tuple[int, PlaybackRequest]] = []
        self._sequence = itertools.count()
        self._head_locked = False

    def insert(self, request: PlaybackRequest) -> int:
        """
        Insert a request in play order.

        Scans from the front for the first entry whose priority is strictly
        greater than the request's and inserts before it, appending when no
        such entry exists. Equal priorities therefore stay in arrival order.

        Args:
            request: PlaybackRequest to add

        Returns:
            The sequence number assigned to the request
        """
        sequence = next(self._sequence)
        start = 1 if self._head_locked else 0
        index = len(self._entries)
        for position in range(start, len(self._entries)):
            if self._entries[position][1].priority > request.priority:
                index = position
                break
        self._entries.insert(index, (sequence, request))
        logger.debug(
            f"[QUEUE] Inserted: seq={sequence}, kind={request.kind!r}, "
            f"priority={int(request.priority)}, position={index}"
        )
        return sequence

    def pop_front(self) -> Optional[PlaybackRequest]:
        """
        Remove and return the head request.

        Also releases a head lock.

        Returns:
            The head PlaybackRequest, or None if the queue is empty
        """
        self._head_locked = False
        if self.is_empty:
            return None
        sequence, request = self._entries.pop(0)
        logger.debug(f"[QUEUE] Popped: seq={sequence}, kind={request.kind!r}")
        return request

    def peek_front(self) -> Optional[PlaybackRequest]:
        """Return the head request without removing it, or None if empty."""
        if self.is_empty:
            return None
        return self._entries[0][1]

    def peek_sequence(self) -> Optional[int]:
        """Return the sequence number of the head, or None if empty."""
        if self.is_empty:
            return None
        return self._entries[0][0]

    def lock_head(self) -> None:
        """
        Pin the current head in place until the next pop_front().

        Used while the head is playing so that a more urgent arrival is
        queued right after it instead of in front of it.
        """
        if not self.is_empty:
            self._head_locked = True

    def release_head(self) -> None:
        """Undo lock_head() without removing the head."""
        self._head_locked = False

    @property
    def head_locked(self) -> bool:
        return self._head_locked

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self) -> Tuple[PlaybackRequest, ...]:
        """
        Immutable copy of the queue contents in play order.

        Returns:
            Tuple of PlaybackRequests, head first
        """
        return tuple(request for _, request in self._entries)

    def dump(self) -> List[str]:
        """
        Dump queue contents for debugging.

        Returns:
            List of string representations of queue items
        """
        return [
            f"seq={sequence}, priority={int(request.priority)}, kind={request.kind!r}"
            for sequence, request in self._entries
        ]
