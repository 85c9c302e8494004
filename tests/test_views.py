import pytest

from sn2simulation.controller.playback import PausedAtTransitionState
from sn2simulation.model.frame import get_frame
from sn2simulation.model.options import DisplayOptions
from sn2simulation.view.main_window import MainWindow
from sn2simulation.view.widgets.energy_diagram import EnergyDiagramWidget
from sn2simulation.view.widgets.molecule_view import MoleculeView
from sn2simulation.view.widgets.playback_controls import PlaybackControlPanel


@pytest.fixture
def window(qapp, controller):
    win = MainWindow(controller)
    yield win
    win.close()


def test_window_follows_the_controller(window, controller):
    controller.seek(50)
    assert window.energy_diagram.current_energy == 110.0
    assert "110.0 kJ/mol" in window.energy_diagram.lbl_energy.text()
    assert "#dc2626" in window.energy_diagram.lbl_energy.text()
    assert window.molecule_view.frame().t == 0.5
    assert window.controls.slider.value() == 500


def test_low_energy_readout_is_not_red(qapp):
    diagram = EnergyDiagramWidget()
    diagram.set_progress(5)
    assert "#dc2626" not in diagram.lbl_energy.text()


def test_slider_seeks(window, controller):
    window.controls.slider.setValue(250)
    assert controller.progress == 25.0
    assert window.molecule_view.frame().t == 0.25


def test_checkboxes_drive_display_options(window, controller):
    window.controls.chk_distances.setChecked(True)
    window.controls.chk_arrows.setChecked(False)
    assert controller.options == DisplayOptions(show_arrows=False, show_distances=True)

    window.controls.chk_auto_pause.setChecked(False)
    assert not controller.auto_pause_enabled


def test_countdown_banner_tracks_the_pause(qapp, controller):
    panel = PlaybackControlPanel(controller)
    controller.state_changed.connect(panel.sync)
    controller.play()
    for _ in range(400):
        controller.advance()
    assert controller.state == PausedAtTransitionState(countdown=3)
    assert not panel.countdown_banner.isHidden()
    assert panel.countdown_banner.lbl_countdown.text() == "3s"

    panel.countdown_banner.btn_resume.click()
    assert panel.countdown_banner.isHidden()
    assert controller.state.phase == "playing"


@pytest.mark.parametrize("t", [0.0, 0.5, 1.0])
def test_molecule_view_paints(qapp, t):
    view = MoleculeView()
    view.resize(550, 350)
    view.set_frame(get_frame(t, DisplayOptions(show_distances=True)))
    image = view.grab().toImage()
    assert not image.isNull()
    assert image.width() == 550


def test_export_energy_diagram(window, tmp_path):
    out = tmp_path / "diagram.png"
    assert window.export_energy_diagram(str(out))
    assert out.stat().st_size > 0


def test_close_shuts_the_controller_down(window, controller):
    controller.play()
    window.close()
    assert not controller.is_frame_timer_active
