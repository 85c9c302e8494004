"""
Playback Controller
===================
Owns the single mutable piece of core state, the reaction ``progress``, and
advances it over wall-clock time.

Why is this file needed?
------------------------
1. State Machine: Idle / Playing / PausedAtTransitionState(countdown) /
   PausedManual are explicit variants; every transition goes through
   ``_set_state``, which acquires and releases the timers of the states
   being entered and left.
2. Timers: A frame QTimer drives ``advance()`` while Playing; a 1 s QTimer
   drives the transition-state countdown. Countdown ticks carry a
   generation number so a tick for a cancelled countdown is a no-op.
3. Signals: Every change emits an immutable ``PlaybackSnapshot`` for the
   views (scrubber, energy diagram, molecule canvas).

Classes:
    PlaybackController: The QObject state machine.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import StrEnum
from functools import partial
from typing import ClassVar, Optional, Union

from PySide6.QtCore import QObject, QTimer, Signal

from sn2simulation.config import MAX_PROGRESS, MIN_PROGRESS, PlaybackConfig
from sn2simulation.model.options import DisplayOptions

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Playback state (tagged variant)
# ------------------------------------------------------------------------------
class PlaybackPhase(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED_AT_TRANSITION_STATE = "paused_at_transition_state"
    PAUSED_MANUAL = "paused_manual"


@dataclass(frozen=True)
class Idle:
    phase: ClassVar[PlaybackPhase] = PlaybackPhase.IDLE


@dataclass(frozen=True)
class Playing:
    phase: ClassVar[PlaybackPhase] = PlaybackPhase.PLAYING


@dataclass(frozen=True)
class PausedAtTransitionState:
    countdown: int
    phase: ClassVar[PlaybackPhase] = PlaybackPhase.PAUSED_AT_TRANSITION_STATE


@dataclass(frozen=True)
class PausedManual:
    phase: ClassVar[PlaybackPhase] = PlaybackPhase.PAUSED_MANUAL


PlaybackState = Union[Idle, Playing, PausedAtTransitionState, PausedManual]


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Everything a view needs to redraw, emitted on every change."""
    progress: float
    state: PlaybackState
    auto_pause: bool
    options: DisplayOptions

    @property
    def t(self) -> float:
        return self.progress / MAX_PROGRESS

    @property
    def phase(self) -> PlaybackPhase:
        return self.state.phase

    @property
    def is_playing(self) -> bool:
        return isinstance(self.state, Playing)

    @property
    def countdown(self) -> Optional[int]:
        if isinstance(self.state, PausedAtTransitionState):
            return self.state.countdown
        return None


# ------------------------------------------------------------------------------
# Controller
# ------------------------------------------------------------------------------
class PlaybackController(QObject):
    """Single source of truth for reaction progress and playback state."""
    state_changed = Signal(object)  # PlaybackSnapshot

    def __init__(self, config: Optional[PlaybackConfig] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.config: PlaybackConfig = config or PlaybackConfig()

        self._progress: float = MIN_PROGRESS
        self._state: PlaybackState = Idle()
        self._auto_pause: bool = True
        self._has_paused: bool = False  # one-shot per forward pass
        self._options: DisplayOptions = DisplayOptions()

        self._in_tick: bool = False
        self._disposed: bool = False

        # Frame Timer (only active while Playing)
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(self.config.frame_interval_ms)
        self._frame_timer.timeout.connect(self.advance)

        # Countdown Timer (one per transition-state pause)
        self._countdown_timer: Optional[QTimer] = None
        self._countdown_generation: int = 0

    # --- READ-ONLY STATE ---

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def auto_pause_enabled(self) -> bool:
        return self._auto_pause

    @property
    def has_paused_at_transition_state(self) -> bool:
        return self._has_paused

    @property
    def options(self) -> DisplayOptions:
        return self._options

    @property
    def countdown_generation(self) -> int:
        return self._countdown_generation

    @property
    def is_frame_timer_active(self) -> bool:
        return self._frame_timer.isActive()

    @property
    def is_countdown_active(self) -> bool:
        return self._countdown_timer is not None and self._countdown_timer.isActive()

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            progress=self._progress,
            state=self._state,
            auto_pause=self._auto_pause,
            options=self._options,
        )

    # --- COMMANDS ---

    def play(self) -> None:
        if self._disposed:
            logger.warning("play() called on a disposed playback controller.")
            return

        match self._state:
            case Playing():
                return
            case PausedAtTransitionState():
                logger.info("Manual resume at the transition state.")
                self._set_state(Playing())
            case Idle() | PausedManual():
                # At the end the next tick clamps back to Idle; only reset() or
                # an early seek re-arm the auto-pause
                self._set_state(Playing())

    def pause(self) -> None:
        match self._state:
            case Playing() | PausedAtTransitionState():
                self._set_state(PausedManual())
            case Idle() | PausedManual():
                return

    def resume(self) -> None:
        """Continue from a paused state; no effect when idle or already playing."""
        match self._state:
            case PausedAtTransitionState() | PausedManual():
                self.play()
            case Idle() | Playing():
                return

    def toggle_play(self) -> None:
        if isinstance(self._state, Playing):
            self.pause()
        else:
            self.play()

    def seek(self, value: float) -> None:
        value = float(value)
        if math.isnan(value):
            raise ValueError("Cannot seek to NaN.")

        self._progress = min(MAX_PROGRESS, max(MIN_PROGRESS, value))
        if self._progress < self.config.rearm_below:
            self._has_paused = False
        self._set_state(PausedManual())

    def reset(self) -> None:
        self._progress = MIN_PROGRESS
        self._has_paused = False
        self._set_state(Idle())

    def set_auto_pause(self, enabled: bool) -> None:
        if self._auto_pause != enabled:
            self._auto_pause = enabled
            logger.info(f"Auto-pause at transition state {'enabled' if enabled else 'disabled'}.")
            self._emit()

    def toggle_auto_pause(self) -> None:
        self.set_auto_pause(not self._auto_pause)

    def set_show_arrows(self, enabled: bool) -> None:
        self._set_options(replace(self._options, show_arrows=enabled))

    def set_show_distances(self, enabled: bool) -> None:
        self._set_options(replace(self._options, show_distances=enabled))

    def shutdown(self) -> None:
        """Release every timer; later ticks are ignored."""
        self._frame_timer.stop()
        self._cancel_countdown()
        self._disposed = True
        logger.debug("Playback controller shut down.")

    # --- TICKS ---

    def advance(self) -> None:
        """Frame tick. Only moves progress while Playing."""
        if self._disposed:
            return
        if self._in_tick:
            logger.debug("Dropped re-entrant frame tick.")
            return
        if not isinstance(self._state, Playing):
            return

        self._in_tick = True
        try:
            previous = self._progress
            target = previous + self.config.tick_step
            pause_at = self.config.pause_progress

            if self._auto_pause and not self._has_paused and previous < pause_at <= target:
                # Snap to the transition state and hold
                self._progress = pause_at
                self._has_paused = True
                self._set_state(PausedAtTransitionState(countdown=self.config.countdown_seconds))
            elif target >= MAX_PROGRESS:
                self._progress = MAX_PROGRESS
                self._set_state(Idle())
            else:
                self._progress = target
                self._emit()
        finally:
            self._in_tick = False

    def countdown_tick(self, generation: Optional[int] = None) -> None:
        """
        One countdown second. ``generation`` identifies the countdown the tick
        belongs to; ticks of a cancelled countdown are dropped.
        """
        if self._disposed:
            return
        if generation is not None and generation != self._countdown_generation:
            logger.debug(f"Dropped stale countdown tick (generation {generation}).")
            return

        match self._state:
            case PausedAtTransitionState(countdown=remaining):
                if remaining <= 1:
                    logger.info("Countdown finished, resuming playback.")
                    self._set_state(Playing())
                else:
                    self._set_state(PausedAtTransitionState(countdown=remaining - 1))
            case Idle() | Playing() | PausedManual():
                logger.debug("Dropped countdown tick outside a transition-state pause.")

    # --- INTERNALS ---

    def _set_state(self, new_state: PlaybackState) -> None:
        old_state = self._state

        # 1. Leave: release resources of the old state
        match old_state:
            case Playing():
                if not isinstance(new_state, Playing):
                    self._frame_timer.stop()
            case PausedAtTransitionState():
                if not isinstance(new_state, PausedAtTransitionState):
                    self._cancel_countdown()
            case Idle() | PausedManual():
                pass

        self._state = new_state

        # 2. Enter: acquire resources of the new state
        match new_state:
            case Playing():
                if not self._frame_timer.isActive():
                    self._frame_timer.start()
            case PausedAtTransitionState():
                if not isinstance(old_state, PausedAtTransitionState):
                    self._start_countdown()
            case Idle() | PausedManual():
                pass

        if old_state.phase != new_state.phase:
            logger.info(f"Playback {old_state.phase} -> {new_state.phase} at progress {self._progress:.3f}.")
        self._emit()

    def _start_countdown(self) -> None:
        self._countdown_generation += 1
        timer = QTimer(self)
        timer.setInterval(self.config.countdown_interval_ms)
        timer.timeout.connect(partial(self.countdown_tick, self._countdown_generation))
        timer.start()
        self._countdown_timer = timer

    def _cancel_countdown(self) -> None:
        # Bumping the generation invalidates any tick already queued
        self._countdown_generation += 1
        if self._countdown_timer is not None:
            self._countdown_timer.stop()
            self._countdown_timer.deleteLater()
            self._countdown_timer = None

    def _set_options(self, options: DisplayOptions) -> None:
        if options != self._options:
            self._options = options
            self._emit()

    def _emit(self) -> None:
        self.state_changed.emit(self.snapshot())
