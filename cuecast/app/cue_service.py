"""
Main entry point for Cuecast.

Builds the single PlaybackScheduler from configuration, wires the resource
locator, player and queue observers, and feeds it requests read from stdin.

Input format, one request per line:
    <kind> [priority]
Blank lines and lines starting with '#' are ignored.
"""

import argparse
import logging
import logging.handlers
import signal
import sys
import time
from typing import Optional, TextIO, Tuple

from cuecast.broadcast_core.playback_request import PlaybackRequest
from cuecast.broadcast_core.playback_scheduler import PlaybackScheduler, SchedulerState
from cuecast.config import CueConfig
from cuecast.outputs.base_player import BasePlayer
from cuecast.outputs.factory import create_player
from cuecast.outputs.queue_webhook import QueueWebhookObserver
from cuecast.resources.resource_locator import DirectoryResourceLocator

logger = logging.getLogger(__name__)


class QueueLogObserver:
    """Logs every queue snapshot."""

    def on_queue_changed(self, snapshot: Tuple[PlaybackRequest, ...]) -> None:
        kinds = ", ".join(f"{request.kind!r}:{int(request.priority)}" for request in snapshot)
        logger.info(f"[QUEUE] {len(snapshot)} request(s): [{kinds}]")


def parse_request_line(line: str, default_priority: int) -> Optional[PlaybackRequest]:
    """
    Parse one input line into a PlaybackRequest.

    Args:
        line: "<kind> [priority]"
        default_priority: Priority used when the line has none

    Returns:
        PlaybackRequest, or None for blank and comment lines

    Raises:
        ValueError: If the priority is not an integer or extra fields are present
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    parts = stripped.split()
    if len(parts) > 2:
        raise ValueError(f"Expected '<kind> [priority]', got: {stripped}")
    priority = default_priority
    if len(parts) == 2:
        try:
            priority = int(parts[1])
        except ValueError:
            raise ValueError(f"Invalid priority: {parts[1]} (must be an integer)")
    return PlaybackRequest(kind=parts[0], priority=priority)


def configure_logging(config: CueConfig) -> None:
    """Set up console logging and, if configured, a rotation-tolerant log file."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    if not config.log_file:
        return

    try:
        # WatchedFileHandler reopens the file after external rotation
        handler = logging.handlers.WatchedFileHandler(config.log_file, mode='a')
    except OSError as e:
        logger.warning(f"Cannot open log file {config.log_file}: {e}")
        return
    handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
    original_emit = handler.emit

    def safe_emit(record):
        try:
            original_emit(record)
        except OSError:
            # Log file write failures must not interrupt playback
            pass

    handler.emit = safe_emit
    logging.getLogger().addHandler(handler)


class CueService:
    """
    Composition root: owns the one PlaybackScheduler and its collaborators.

    Callers get the scheduler through the service instead of a global.
    """

    def __init__(self, config: CueConfig, player: Optional[BasePlayer] = None):
        self.config = config
        self.locator = DirectoryResourceLocator(config.resource_dir)
        self.player = player or create_player(config)
        self.scheduler = PlaybackScheduler(
            locator=self.locator,
            player=self.player,
            observers=[QueueLogObserver()],
            skip_failed_head=config.skip_failed_head,
        )
        self.webhook: Optional[QueueWebhookObserver] = None
        if config.queue_webhook_url:
            self.webhook = QueueWebhookObserver(config.queue_webhook_url)
            self.scheduler.add_observer(self.webhook)

    def submit_line(self, line: str) -> bool:
        """Parse and submit one input line. Returns True if a request was queued."""
        try:
            request = parse_request_line(line, self.config.default_priority)
        except ValueError as e:
            logger.error(f"[SERVICE] {e}")
            return False
        if request is None:
            return False
        return self.scheduler.submit(request)

    def run(self, stream: TextIO) -> int:
        """
        Submit every request read from stream.

        Returns:
            Number of requests queued
        """
        queued = 0
        for line in stream:
            if self.submit_line(line):
                queued += 1
        return queued

    def wait_until_idle(self, poll_interval: float = 0.1) -> None:
        """Block until nothing is playing. A stalled queue counts as idle."""
        while self.scheduler.state is SchedulerState.PLAYING:
            time.sleep(poll_interval)

    def stop(self) -> None:
        self.player.close()
        if self.webhook:
            self.webhook.close()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuecast",
        description="Play sound cues in priority order, one at a time.",
    )
    parser.add_argument("--resource-dir", help="Directory holding the sound files")
    parser.add_argument("--player", choices=["null", "ffplay"], help="Playback backend")
    parser.add_argument(
        "--skip-failed-head",
        action="store_true",
        default=None,
        help="Drop a request that fails to start instead of stalling the queue",
    )
    return parser


def main(args: Optional[list[str]] = None) -> None:
    """
    Main entry point for Cuecast.

    Reads requests from stdin until EOF, then exits.
    """
    options = build_arg_parser().parse_args(args)
    config = CueConfig.load_config()
    if options.resource_dir:
        config.resource_dir = options.resource_dir
    if options.player:
        config.player_mode = options.player
    if options.skip_failed_head:
        config.skip_failed_head = True

    configure_logging(config)
    logger.info(f"Cuecast starting (resources={config.resource_dir}, player={config.player_mode})")

    service = CueService(config)

    def signal_handler(sig, frame):
        signal_name = "SIGTERM" if sig == signal.SIGTERM else "SIGINT"
        logger.info(f"[SERVICE] Received {signal_name} - stopping")
        service.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        queued = service.run(sys.stdin)
        logger.info(f"[SERVICE] Input closed after {queued} request(s) - waiting for playback to finish")
        service.wait_until_idle()
        if service.scheduler.queue_length:
            logger.warning(f"[SERVICE] Exiting with {service.scheduler.queue_length} request(s) stalled in queue")
    finally:
        service.stop()


if __name__ == "__main__":
    main()
