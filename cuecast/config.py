"""
Configuration management for Cuecast.

Reads configuration from .env file and environment variables with sensible defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from cuecast.broadcast_core.playback_request import CuePriority


# Default .env file location
DEFAULT_ENV_FILE = Path("/etc/cuecast/cuecast.env")

PLAYER_MODES = ("null", "ffplay")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def _load_env_file():
    """Load environment variables from .env file if it exists."""
    env_file = os.getenv("CUECAST_ENV_FILE", str(DEFAULT_ENV_FILE))
    env_path = Path(env_file)

    if env_path.exists():
        load_dotenv(env_path, override=False)  # Don't override existing env vars


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class CueConfig:
    """Cuecast configuration loaded from .env file and environment variables."""

    # Resources
    resource_dir: str = "./sounds"

    # Player
    player_mode: str = "null"
    null_playback_seconds: float = 1.0
    ffplay_path: str = "ffplay"

    # Scheduling
    skip_failed_head: bool = False
    default_priority: int = int(CuePriority.NORMAL)

    # Queue observers
    queue_webhook_url: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def load_config(cls) -> "CueConfig":
        """
        Load configuration from environment variables.

        Returns:
            CueConfig instance with loaded values

        Raises:
            ValueError: If configuration is invalid
        """
        # Load .env file first (if it exists)
        _load_env_file()

        resource_dir = os.getenv("CUECAST_RESOURCE_DIR", "./sounds")

        player_mode = os.getenv("CUECAST_PLAYER_MODE", "null").lower()
        if player_mode not in PLAYER_MODES:
            raise ValueError(
                f"Invalid CUECAST_PLAYER_MODE: {player_mode} (must be one of {', '.join(PLAYER_MODES)})"
            )

        null_playback_seconds_str = os.getenv("CUECAST_NULL_PLAYBACK_SECONDS", "1.0")
        try:
            null_playback_seconds = float(null_playback_seconds_str)
        except ValueError:
            raise ValueError(
                f"Invalid CUECAST_NULL_PLAYBACK_SECONDS: {null_playback_seconds_str} (must be a number)"
            )
        if null_playback_seconds < 0:
            raise ValueError(
                f"Invalid CUECAST_NULL_PLAYBACK_SECONDS: {null_playback_seconds_str} (must not be negative)"
            )

        ffplay_path = os.getenv("CUECAST_FFPLAY_PATH", "ffplay")

        skip_failed_head = _parse_bool(os.getenv("CUECAST_SKIP_FAILED_HEAD", ""))

        default_priority_str = os.getenv("CUECAST_DEFAULT_PRIORITY", str(int(CuePriority.NORMAL)))
        try:
            default_priority = int(default_priority_str)
        except ValueError:
            raise ValueError(
                f"Invalid CUECAST_DEFAULT_PRIORITY: {default_priority_str} (must be an integer)"
            )

        queue_webhook_url = os.getenv("CUECAST_QUEUE_WEBHOOK_URL")
        if queue_webhook_url == "":
            queue_webhook_url = None

        # Logging
        log_level = os.getenv("CUECAST_LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid CUECAST_LOG_LEVEL: {log_level} (must be one of {', '.join(LOG_LEVELS)})"
            )
        log_file = os.getenv("CUECAST_LOG_FILE") or None

        config = cls(
            resource_dir=resource_dir,
            player_mode=player_mode,
            null_playback_seconds=null_playback_seconds,
            ffplay_path=ffplay_path,
            skip_failed_head=skip_failed_head,
            default_priority=default_priority,
            queue_webhook_url=queue_webhook_url,
            log_level=log_level,
            log_file=log_file,
        )
        logger.debug(f"Loaded configuration: {config}")
        return config
