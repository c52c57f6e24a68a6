"""
Queue webhook observer for Cuecast.

Forwards every queue snapshot to an HTTP endpoint as JSON. Delivery runs
on a background thread so the scheduler never waits on the network.
"""

import logging
import queue
import threading
import time
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import httpx

from cuecast.broadcast_core.playback_request import PlaybackRequest

logger = logging.getLogger(__name__)

_STOP = object()


def _kind_to_json(kind: Any) -> Any:
    if isinstance(kind, Enum):
        return kind.name
    if isinstance(kind, (str, int, float, bool)) or kind is None:
        return kind
    return str(kind)


class QueueWebhookObserver:
    """
    Queue observer that POSTs snapshots to a URL.

    on_queue_changed() only builds the payload and hands it to a bounded
    outbox; a daemon worker thread sends payloads in order. When the outbox
    is full (endpoint slow or down) new snapshots are dropped, so a stalled
    endpoint loses intermediate snapshots instead of delaying playback.

    Transport-only: delivery failures are logged and dropped, they never
    reach the scheduler.
    """

    def __init__(self, url: str, timeout: float = 0.5, max_pending: int = 64):
        """
        Args:
            url: Endpoint receiving the snapshots
            timeout: Request timeout in seconds
            max_pending: Snapshots buffered before new ones are dropped
        """
        self.url = url
        self.timeout = timeout
        self._outbox: "queue.Queue[Any]" = queue.Queue(maxsize=max_pending)
        self._worker: Optional[threading.Thread] = threading.Thread(
            target=self._run,
            name="queue-webhook",
            daemon=True,
        )
        self._worker.start()

        # Keep httpx's per-request INFO lines out of the scheduler log
        logging.getLogger("httpx").setLevel(logging.WARNING)

        logger.info(f"QueueWebhookObserver initialized (url={self.url})")

    @staticmethod
    def build_payload(snapshot: Tuple[PlaybackRequest, ...]) -> Dict[str, Any]:
        return {
            "event_type": "queue_changed",
            "timestamp": time.time(),
            "queue": [
                {"kind": _kind_to_json(request.kind), "priority": int(request.priority)}
                for request in snapshot
            ],
        }

    def on_queue_changed(self, snapshot: Tuple[PlaybackRequest, ...]) -> None:
        if self._worker is None:
            return
        try:
            self._outbox.put_nowait(self.build_payload(snapshot))
        except queue.Full:
            logger.debug("[WEBHOOK] Outbox full, dropping queue snapshot")

    def flush(self) -> None:
        """Block until every buffered snapshot has been sent or dropped."""
        self._outbox.join()

    def close(self) -> None:
        """Send what is buffered, then stop the worker thread."""
        if self._worker is None:
            return
        worker, self._worker = self._worker, None
        self._outbox.put(_STOP)
        worker.join(timeout=self.timeout * 2 + 1.0)

    def _run(self) -> None:
        while True:
            payload = self._outbox.get()
            try:
                if payload is _STOP:
                    return
                self._send(payload)
            finally:
                self._outbox.task_done()

    def _send(self, payload: Dict[str, Any]) -> None:
        try:
            response = httpx.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"[WEBHOOK] Failed to send queue snapshot: {e}")
