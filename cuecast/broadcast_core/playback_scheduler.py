"""
Playback Scheduler for Cuecast.

Owns the EventQueue and the "currently playing" state. Starts the head of
the queue whenever it is idle, advances to the next request when the player
reports completion, and notifies queue observers after every mutation.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Hashable, Iterable, List, Optional, Protocol, Tuple

from cuecast.broadcast_core.errors import CueError, PlaybackStartFailure, ResourceNotFound
from cuecast.broadcast_core.event_queue import EventQueue
from cuecast.broadcast_core.playback_request import PlaybackRequest

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"
    PLAYING = "playing"


class ResourceLocator(Protocol):
    """Turns a request kind into a playable resource handle."""

    def resolve(self, kind: Hashable) -> Optional[Any]:
        """
        Args:
            kind: The request kind to look up

        Returns:
            An opaque resource handle, or None if the resource does not exist
        """
        ...


class Player(Protocol):
    """
    Single-slot playback backend.

    start_playback() returns True when playback was accepted. For every
    accepted call the player must invoke on_finished exactly once, after
    playback ends (naturally or by error). Completion should be reported
    after start_playback() returns; a report from inside it is tolerated,
    whatever start_playback() then returns.
    """

    def start_playback(self, handle: Any, on_finished: Callable[[bool], None]) -> bool:
        ...


class QueueObserver(Protocol):
    """Receives a read-only snapshot of the queue after every mutation."""

    def on_queue_changed(self, snapshot: Tuple[PlaybackRequest, ...]) -> None:
        ...


class PlaybackScheduler:
    """
    Sequential, priority-ordered cue scheduler.

    States: IDLE (nothing playing) and PLAYING (the queue head is playing).
    The playing request stays at the head of the queue until its completion
    is reported, so observers see it as the first snapshot entry.

    All public methods run under one re-entrant lock, so a player may report
    completion from its own thread.
    """

    def __init__(
        self,
        locator: ResourceLocator,
        player: Player,
        observers: Optional[Iterable[QueueObserver]] = None,
        skip_failed_head: bool = False,
    ):
        """
        Initialize the scheduler.

        Args:
            locator: Resolves request kinds to resource handles
            player: Playback backend
            observers: Optional initial queue observers
            skip_failed_head: When True, a head that cannot be started is
                              dropped and the next request is tried. When
                              False the queue stalls on it until the next
                              submission or completion.
        """
        self._queue = EventQueue()
        self._locator = locator
        self._player = player
        self._observers: List[QueueObserver] = list(observers or [])
        self._skip_failed_head = skip_failed_head
        self._state = SchedulerState.IDLE
        self._current_request: Optional[PlaybackRequest] = None
        self._current_token: Optional[int] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def current_request(self) -> Optional[PlaybackRequest]:
        return self._current_request

    @property
    def current_token(self) -> Optional[int]:
        """Playback token of the in-flight request, None when idle."""
        return self._current_token

    @property
    def queue_length(self) -> int:
        with self._lock:
            return len(self._queue)

    def snapshot(self) -> Tuple[PlaybackRequest, ...]:
        with self._lock:
            return self._queue.snapshot()

    def add_observer(self, observer: QueueObserver) -> None:
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def remove_observer(self, observer: QueueObserver) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def submit(self, request: PlaybackRequest) -> bool:
        """
        Queue a request and start it if nothing is playing.

        A request whose resource cannot be resolved is dropped: the queue is
        left untouched and observers are not notified.

        Args:
            request: PlaybackRequest to queue

        Returns:
            True if the request was queued, False if it was dropped
        """
        with self._lock:
            try:
                self._resolve(request)
            except ResourceNotFound as e:
                logger.error(f"[SCHEDULER] Submission dropped: {e}")
                return False

            self._queue.insert(request)
            logger.info(
                f"[SCHEDULER] Queued {request.kind!r} (priority={int(request.priority)}, "
                f"queue_length={len(self._queue)})"
            )
            self._notify()

            if self._state is SchedulerState.IDLE:
                self._advance()
            return True

    def on_playback_finished(self, success: bool, token: Optional[int] = None) -> None:
        """
        Handle the end of the current playback and advance the queue.

        Pops the head (the request that just played), then starts the new
        head if there is one. Failed playback is logged and still advances.

        Args:
            success: Whether playback completed successfully
            token: Playback token of the finished request. When given, a
                   completion for anything but the in-flight request is
                   ignored.
        """
        with self._lock:
            if self._state is not SchedulerState.PLAYING:
                logger.info("[SCHEDULER] Playback finished reported while idle - nothing to advance")
                return

            if token is not None and token != self._current_token:
                logger.warning(
                    f"[SCHEDULER] Ignoring stale completion (token={token}, "
                    f"current={self._current_token})"
                )
                return

            finished = self._current_request
            if success:
                logger.info(f"[SCHEDULER] Finished {finished.kind!r}")
            else:
                logger.warning(f"[SCHEDULER] Playback of {finished.kind!r} ended with an error")

            if self._queue.peek_sequence() != self._current_token:
                logger.warning("[SCHEDULER] Queue head does not match the finished request")

            self._queue.pop_front()
            self._set_idle()
            self._notify()
            self._advance()

    def _advance(self) -> None:
        """
        Start the queue head, applying the failed-head policy.

        Must be called with the lock held while idle.
        """
        while not self._queue.is_empty:
            try:
                self._start_head()
                return
            except CueError as e:
                logger.error(f"[SCHEDULER] {e}")
                head = self._queue.peek_front()
                if head is None or self._state is SchedulerState.PLAYING:
                    # A completion reported inside start_playback already advanced
                    return
                if not self._skip_failed_head:
                    logger.warning(
                        f"[SCHEDULER] Queue stalled on {head.kind!r} "
                        f"({len(self._queue)} request(s) waiting)"
                    )
                    return
                skipped = self._queue.pop_front()
                logger.warning(f"[SCHEDULER] Skipping {skipped.kind!r}")
                self._notify()
        logger.info("[SCHEDULER] Queue empty - idle")

    def _start_head(self) -> None:
        """
        Start playing the queue head without removing it.

        State is committed before the player is called and rolled back if
        the player does not accept the resource.

        Raises:
            ResourceNotFound: If the head's resource cannot be resolved
            PlaybackStartFailure: If the player does not start playback
        """
        request = self._queue.peek_front()
        token = self._queue.peek_sequence()
        handle = self._resolve(request)

        self._state = SchedulerState.PLAYING
        self._current_request = request
        self._current_token = token
        self._queue.lock_head()

        try:
            accepted = self._player.start_playback(handle, self._completion_handler(token))
        except Exception as e:
            self._rollback_start(token)
            raise PlaybackStartFailure(request.kind, str(e)) from e
        if not accepted:
            self._rollback_start(token)
            raise PlaybackStartFailure(request.kind)

        logger.info(f"[SCHEDULER] Playing {request.kind!r} (token={token})")

    def _rollback_start(self, token: int) -> None:
        if self._current_token == token:
            self._set_idle()
            self._queue.release_head()

    def _completion_handler(self, token: int) -> Callable[[bool], None]:
        """Build the one-shot completion callback handed to the player."""
        fired = False

        def on_finished(success: bool) -> None:
            nonlocal fired
            with self._lock:
                if fired:
                    logger.warning(f"[SCHEDULER] Duplicate completion for token={token} ignored")
                    return
                fired = True
                self.on_playback_finished(success, token=token)

        return on_finished

    def _resolve(self, request: PlaybackRequest) -> Any:
        handle = self._locator.resolve(request.kind)
        if handle is None:
            raise ResourceNotFound(request.kind)
        return handle

    def _set_idle(self) -> None:
        self._state = SchedulerState.IDLE
        self._current_request = None
        self._current_token = None

    def _notify(self) -> None:
        snapshot = self._queue.snapshot()
        for observer in list(self._observers):
            try:
                observer.on_queue_changed(snapshot)
            except Exception as e:
                logger.error(f"[SCHEDULER] Error in queue observer {observer!r}: {e}")
