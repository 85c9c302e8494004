import math

import pytest

from sn2simulation.config import PlaybackConfig
from sn2simulation.controller.playback import (
    Idle,
    PausedAtTransitionState,
    PausedManual,
    PlaybackController,
    PlaybackPhase,
    Playing,
)


def tick(controller, n):
    for _ in range(n):
        controller.advance()


def test_initial_state(controller):
    assert controller.progress == 0.0
    assert controller.state == Idle()
    assert controller.auto_pause_enabled
    assert not controller.is_frame_timer_active


def test_full_run_pauses_once_at_transition_state(controller):
    controller.play()
    assert controller.state == Playing()
    assert controller.is_frame_timer_active

    tick(controller, 400)
    assert controller.progress == 50.0
    assert controller.state == PausedAtTransitionState(countdown=3)
    assert controller.has_paused_at_transition_state
    assert controller.is_countdown_active
    assert not controller.is_frame_timer_active

    # Progress is frozen while paused
    tick(controller, 10)
    assert controller.progress == 50.0

    controller.countdown_tick()
    assert controller.state == PausedAtTransitionState(countdown=2)
    controller.countdown_tick()
    controller.countdown_tick()
    assert controller.state == Playing()
    assert not controller.is_countdown_active

    tick(controller, 400)
    assert controller.progress == 100.0
    assert controller.state == Idle()

    tick(controller, 5)
    assert controller.progress == 100.0


def test_progress_is_monotonic_while_playing(controller):
    controller.set_auto_pause(False)
    controller.play()
    values = []
    for _ in range(900):
        controller.advance()
        values.append(controller.progress)
    assert values == sorted(values)
    assert values[-1] == 100.0
    assert controller.state == Idle()


def test_no_pause_when_auto_pause_disabled(controller):
    controller.set_auto_pause(False)
    controller.play()
    tick(controller, 401)
    assert controller.state == Playing()
    assert controller.progress == 50.125


def test_manual_resume_skips_the_countdown(controller):
    controller.play()
    tick(controller, 400)
    controller.resume()
    assert controller.state == Playing()
    tick(controller, 1)
    assert controller.progress == 50.125


def test_pause_and_resume(controller):
    controller.play()
    tick(controller, 8)
    controller.pause()
    assert controller.state == PausedManual()
    assert not controller.is_frame_timer_active
    tick(controller, 8)
    assert controller.progress == 1.0

    controller.resume()
    assert controller.state == Playing()


def test_resume_is_ignored_when_idle(controller):
    controller.resume()
    assert controller.state == Idle()


def test_toggle_play(controller):
    controller.toggle_play()
    assert controller.state == Playing()
    controller.toggle_play()
    assert controller.state == PausedManual()


def test_seek_clamps_and_pauses(controller):
    controller.play()
    controller.seek(150)
    assert controller.progress == 100.0
    assert controller.state == PausedManual()
    controller.seek(-5)
    assert controller.progress == 0.0


def test_seek_rejects_nan(controller):
    with pytest.raises(ValueError):
        controller.seek(math.nan)


def test_seek_cancels_transition_state_pause(controller):
    controller.play()
    tick(controller, 400)
    controller.seek(60)
    assert controller.state == PausedManual()
    assert not controller.is_countdown_active


def test_seek_back_rearms_auto_pause(controller):
    controller.play()
    tick(controller, 400)
    controller.countdown_tick()
    controller.countdown_tick()
    controller.countdown_tick()
    tick(controller, 80)

    controller.seek(10)
    assert not controller.has_paused_at_transition_state
    controller.play()
    tick(controller, 320)
    assert controller.state == PausedAtTransitionState(countdown=3)


def test_seek_just_below_transition_state_does_not_rearm(controller):
    controller.play()
    tick(controller, 400)
    controller.seek(49.5)
    assert controller.has_paused_at_transition_state
    controller.play()
    tick(controller, 8)
    assert controller.state == Playing()
    assert controller.progress > 50.0


def test_seek_past_transition_state_runs_to_end(controller):
    controller.seek(60)
    controller.play()
    tick(controller, 320)
    assert controller.progress == 100.0
    assert controller.state == Idle()
    assert not controller.has_paused_at_transition_state


def run_to_end(controller):
    controller.play()
    tick(controller, 400)
    for _ in range(3):
        controller.countdown_tick()
    tick(controller, 400)
    assert controller.state == Idle()
    assert controller.progress == 100.0


def test_play_at_end_returns_to_idle(controller):
    run_to_end(controller)
    controller.play()
    assert controller.state == Playing()
    tick(controller, 1)
    assert controller.progress == 100.0
    assert controller.state == Idle()


def test_play_at_end_does_not_rearm_auto_pause(controller):
    run_to_end(controller)
    controller.play()
    tick(controller, 400)
    assert controller.has_paused_at_transition_state
    assert controller.state == Idle()


def test_seek_to_end_then_play_does_not_rearm_auto_pause(controller):
    run_to_end(controller)
    controller.seek(100)
    controller.play()
    tick(controller, 400)
    assert controller.has_paused_at_transition_state
    assert controller.state == Idle()
    assert controller.progress == 100.0


def test_replay_after_reset_pauses_again(controller):
    run_to_end(controller)
    controller.reset()
    controller.play()
    tick(controller, 400)
    assert controller.state == PausedAtTransitionState(countdown=3)


def test_reentrant_advance_is_dropped(controller):
    controller.set_auto_pause(False)
    controller.play()
    nested_calls = []

    def advance_from_slot(snapshot):
        nested_calls.append(snapshot.progress)
        controller.advance()

    controller.state_changed.connect(advance_from_slot)
    controller.advance()
    controller.state_changed.disconnect(advance_from_slot)

    assert nested_calls == [controller.config.tick_step]
    assert controller.progress == controller.config.tick_step


def test_reset(controller):
    controller.play()
    tick(controller, 400)
    controller.reset()
    assert controller.progress == 0.0
    assert controller.state == Idle()
    assert not controller.has_paused_at_transition_state
    assert not controller.is_countdown_active


def test_stale_countdown_tick_is_dropped(controller):
    controller.play()
    tick(controller, 400)
    stale_generation = controller.countdown_generation

    controller.seek(20)
    controller.play()
    tick(controller, 240)
    assert controller.state == PausedAtTransitionState(countdown=3)

    controller.countdown_tick(stale_generation)
    assert controller.state == PausedAtTransitionState(countdown=3)

    controller.countdown_tick(controller.countdown_generation)
    assert controller.state == PausedAtTransitionState(countdown=2)


def test_countdown_tick_outside_pause_is_ignored(controller):
    controller.countdown_tick()
    assert controller.state == Idle()


def test_toggling_auto_pause_keeps_an_active_pause(controller):
    controller.play()
    tick(controller, 400)
    controller.toggle_auto_pause()
    assert not controller.auto_pause_enabled
    assert controller.state == PausedAtTransitionState(countdown=3)


def test_display_toggles_update_snapshot(controller, snapshots):
    controller.set_show_distances(True)
    controller.set_show_arrows(False)
    options = snapshots[-1].options
    assert options.show_distances
    assert not options.show_arrows

    count = len(snapshots)
    controller.set_show_arrows(False)
    assert len(snapshots) == count


def test_snapshot_signal(controller, snapshots):
    controller.play()
    tick(controller, 4)
    last = snapshots[-1]
    assert last.progress == 0.5
    assert last.t == pytest.approx(0.005)
    assert last.phase == PlaybackPhase.PLAYING
    assert last.is_playing
    assert last.countdown is None

    tick(controller, 396)
    assert snapshots[-1].countdown == 3


def test_shutdown_stops_everything(controller):
    controller.play()
    tick(controller, 400)
    controller.shutdown()
    assert not controller.is_frame_timer_active
    assert not controller.is_countdown_active

    controller.countdown_tick()
    controller.play()
    assert controller.progress == 50.0


def test_custom_config(qapp):
    ctrl = PlaybackController(PlaybackConfig(tick_step=1.0, countdown_seconds=1))
    try:
        ctrl.play()
        tick(ctrl, 50)
        assert ctrl.state == PausedAtTransitionState(countdown=1)
        ctrl.countdown_tick()
        assert ctrl.state == Playing()
    finally:
        ctrl.shutdown()
