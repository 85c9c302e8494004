import os

# Headless Qt and matplotlib; must be set before either is imported
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest
from PySide6.QtWidgets import QApplication

from sn2simulation.config import PlaybackConfig
from sn2simulation.controller.playback import PlaybackController


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def controller(qapp):
    ctrl = PlaybackController(PlaybackConfig())
    yield ctrl
    ctrl.shutdown()


@pytest.fixture
def snapshots(controller):
    """Every snapshot emitted by ``controller`` during a test."""
    received = []
    controller.state_changed.connect(received.append)
    return received
