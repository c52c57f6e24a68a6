import logging
import subprocess
import threading
from typing import Any, Callable, Optional

from .base_player import BasePlayer

logger = logging.getLogger(__name__)


class FFplayPlayer(BasePlayer):
    """
    Plays each resource in its own ffplay subprocess.

    A watcher thread waits for the process to exit and reports completion;
    exit code 0 counts as success.
    """

    def __init__(self, ffplay_path: str = "ffplay"):
        """
        Initialize ffplay player.

        Args:
            ffplay_path: ffplay executable (default: "ffplay" on PATH)
        """
        self.ffplay_path = ffplay_path
        self.proc: Optional[subprocess.Popen] = None
        self._watcher: Optional[threading.Thread] = None
        self._closed = False

    def start_playback(self, handle: Any, on_finished: Callable[[bool], None]) -> bool:
        """Spawn ffplay for the resource and watch it in the background."""
        if self._closed:
            logger.warning(f"[PLAYER] Cannot start {handle}: player closed")
            return False
        if self.proc is not None and self.proc.poll() is None:
            logger.warning(f"[PLAYER] Cannot start {handle}: already playing")
            return False

        cmd = [
            self.ffplay_path,
            "-nodisp",
            "-autoexit",
            "-loglevel", "error",
            str(handle),
        ]
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"[PLAYER] Failed to launch {self.ffplay_path}: {e}")
            return False

        self.proc = proc
        self._watcher = threading.Thread(
            target=self._watch,
            args=(proc, handle, on_finished),
            name="ffplay-watcher",
            daemon=True,
        )
        self._watcher.start()
        logger.debug(f"[PLAYER] ffplay started (pid={proc.pid}) for {handle}")
        return True

    def _watch(self, proc: subprocess.Popen, handle: Any, on_finished: Callable[[bool], None]) -> None:
        _, stderr = proc.communicate()
        success = proc.returncode == 0
        if self._closed:
            # Terminated by close(), no completion is reported
            logger.debug(f"[PLAYER] ffplay for {handle} stopped by close")
            return
        if not success:
            detail = stderr.decode(errors="replace").strip() if stderr else ""
            logger.warning(f"[PLAYER] ffplay exited with {proc.returncode} for {handle}: {detail}")
        on_finished(success)

    def close(self) -> None:
        """
        Terminate the running ffplay process, if any.

        After close no playback is started and no completion is reported.
        """
        self._closed = True
        if self.proc and self.proc.poll() is None:
            self.proc.terminate()
        self.proc = None
