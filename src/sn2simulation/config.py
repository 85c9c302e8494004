"""
Configuration & Constants
=========================
This module serves as the central registry for application identifiers and
the tunable constants of the playback engine.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (tick step, countdown length, the
   re-arm threshold) scattered throughout the controller and the views.
2. Validation: Invalid settings are programmer errors and are rejected when
   the configuration object is constructed, never at runtime.

Exports:
    PlaybackConfig: Frozen, validated playback settings.
    get_log_level (callable): Log level requested through the environment.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

ORG_ID = "sn2-simulation"
APP_ID = "sn2-simulation"
VISIBLE_APP_NAME = "SN2 Reaction Simulator"

LOG_LEVEL_ENV = "SN2SIM_LOG_LEVEL"
LOG_FILE_ENV = "SN2SIM_LOG_FILE"

MIN_PROGRESS: float = 0.0
MAX_PROGRESS: float = 100.0


@dataclass(frozen=True)
class PlaybackConfig:
    """
    Settings of the Playback Controller.

    Attributes:
        tick_step: Progress added per frame tick (0..100 scale).
        frame_interval_ms: Frame timer period (~60 FPS).
        countdown_seconds: Length of the transition-state pause.
        countdown_interval_ms: Period of one countdown tick.
        pause_progress: Progress at which playback auto-pauses.
        rearm_below: Seeking strictly below this re-arms the auto-pause.
    """
    tick_step: float = 0.125
    frame_interval_ms: int = 16
    countdown_seconds: int = 3
    countdown_interval_ms: int = 1000
    pause_progress: float = 50.0
    rearm_below: float = 49.0

    def __post_init__(self) -> None:
        if not self.tick_step > 0.0:
            raise ValueError(f"tick_step must be positive, got {self.tick_step}.")
        if self.frame_interval_ms <= 0 or self.countdown_interval_ms <= 0:
            raise ValueError("Timer intervals must be positive.")
        if self.countdown_seconds < 1:
            raise ValueError(f"countdown_seconds must be at least 1, got {self.countdown_seconds}.")
        if not MIN_PROGRESS < self.pause_progress < MAX_PROGRESS:
            raise ValueError(f"pause_progress must lie inside (0, 100), got {self.pause_progress}.")
        if not MIN_PROGRESS <= self.rearm_below <= self.pause_progress:
            raise ValueError(f"rearm_below must lie in [0, pause_progress], got {self.rearm_below}.")


def get_log_level(default: int = logging.INFO) -> int:
    """Read the log level name (e.g. "DEBUG") from the environment."""
    name: Optional[str] = os.environ.get(LOG_LEVEL_ENV)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def get_log_file() -> Optional[str]:
    return os.environ.get(LOG_FILE_ENV) or None
