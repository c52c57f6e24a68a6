from abc import ABC, abstractmethod
from typing import Any, Callable


class BasePlayer(ABC):
    """
    Abstract base class for all playback backends.

    A player holds at most one playback at a time. For every accepted
    start_playback() call it invokes on_finished exactly once, after the
    playback ends. Completion should be reported after start_playback()
    returns; the scheduler tolerates a report from inside it.
    """

    @abstractmethod
    def start_playback(self, handle: Any, on_finished: Callable[[bool], None]) -> bool:
        """
        Begin playing a resource.

        Args:
            handle: Resource handle produced by the resource locator
            on_finished: Completion handler, called with True on success

        Returns:
            True if playback was accepted, False otherwise
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """
        Stop any playback and release resources.

        A closed player rejects start_playback() and does not report
        completion for a playback it stopped.
        """
        ...
