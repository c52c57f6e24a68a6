"""
Error taxonomy for the Cuecast scheduler.

Both errors are non-fatal: the scheduler logs them where they occur and
never lets them reach the caller of submit() or on_playback_finished().
"""


class CueError(Exception):
    """Base class for scheduler errors."""


class ResourceNotFound(CueError):
    """The resource backing a request's kind could not be located."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Resource for {kind!r} not found")


class PlaybackStartFailure(CueError):
    """The player refused or failed to begin playback of a resource."""

    def __init__(self, kind, reason: str = "player rejected resource"):
        self.kind = kind
        self.reason = reason
        super().__init__(f"Playback of {kind!r} failed to start: {reason}")
