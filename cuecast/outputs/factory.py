from cuecast.config import CueConfig
from .base_player import BasePlayer
from .null_player import NullPlayer
from .ffplay_player import FFplayPlayer


def create_player(config: CueConfig) -> BasePlayer:
    """
    Create a player based on configuration.

    Modes:
        "null": silent player that finishes after null_playback_seconds
        "ffplay": plays through an ffplay subprocess

    Returns:
        BasePlayer instance configured according to config.player_mode
    """
    if config.player_mode == "ffplay":
        return FFplayPlayer(config.ffplay_path)

    # Default: no audio, scheduling logic still runs
    return NullPlayer(config.null_playback_seconds)
