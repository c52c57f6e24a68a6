import logging
import threading
from typing import Any, Callable, Optional

from .base_player import BasePlayer

logger = logging.getLogger(__name__)


class NullPlayer(BasePlayer):
    """A player that produces no sound and reports success after a fixed time. Useful for dry runs."""

    def __init__(self, playback_seconds: float = 1.0):
        self.playback_seconds = playback_seconds
        self._timer: Optional[threading.Timer] = None
        self._closed = False

    def start_playback(self, handle: Any, on_finished: Callable[[bool], None]) -> bool:
        if self._closed:
            logger.warning(f"[PLAYER] Cannot start {handle}: player closed")
            return False
        logger.info(f"[PLAYER] (null) playing {handle} for {self.playback_seconds:.1f}s")
        self._timer = threading.Timer(self.playback_seconds, self._finish, args=(on_finished,))
        self._timer.daemon = True
        self._timer.start()
        return True

    def _finish(self, on_finished: Callable[[bool], None]) -> None:
        if not self._closed:
            on_finished(True)

    def close(self) -> None:
        self._closed = True
        if self._timer:
            self._timer.cancel()
            self._timer = None
