"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the molecule canvas, the
energy diagram and the playback controls.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (Export, Play/Pause, Reset) and the
   controller's ``state_changed`` signal to the views.
3. Lifetime: Closing the window shuts the playback controller down so no
   timer outlives the UI.
"""
import logging
import os
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QMainWindow, QMessageBox, QSplitter, QVBoxLayout, QWidget
)

from sn2simulation.config import VISIBLE_APP_NAME
from sn2simulation.controller.playback import PlaybackController, PlaybackSnapshot
from sn2simulation.model.energy import DEFAULT_PROFILE
from sn2simulation.model.frame import get_frame
from sn2simulation.view.widgets.energy_diagram import EnergyDiagramWidget
from sn2simulation.view.widgets.key_concepts import KeyConceptsPanel
from sn2simulation.view.widgets.molecule_view import MoleculeView
from sn2simulation.view.widgets.playback_controls import PlaybackControlPanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, controller: Optional[PlaybackController] = None) -> None:
        super().__init__()
        self.controller: PlaybackController = controller or PlaybackController(parent=self)

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 800)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        main_layout.addWidget(splitter, stretch=1)

        # --- LEFT: Molecule ---
        self.molecule_view = MoleculeView()
        splitter.addWidget(self.molecule_view)

        # --- MIDDLE: Energy Diagram ---
        self.energy_diagram = EnergyDiagramWidget()
        splitter.addWidget(self.energy_diagram)

        # --- RIGHT: Key Concepts ---
        self.key_concepts = KeyConceptsPanel()
        splitter.addWidget(self.key_concepts)

        # Initial proportions (4 : 4 : 2)
        splitter.setSizes([560, 560, 280])

        # --- BOTTOM: Playback ---
        controls_row = QHBoxLayout()
        self.controls = PlaybackControlPanel(self.controller)
        controls_row.addWidget(self.controls)
        main_layout.addLayout(controls_row)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- SIGNAL CONNECTIONS ---
        self.controller.state_changed.connect(self.on_state_changed)

        # Initial Render
        self.on_state_changed(self.controller.snapshot())

    def _create_actions(self) -> None:
        # File Actions
        self.act_export = QAction("Export Energy Diagram...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_energy_diagram)

        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self.act_exit.triggered.connect(self.close)

        # Playback Actions
        self.act_play = QAction("Play / Pause", self)
        self.act_play.setShortcut("Space")
        self.act_play.triggered.connect(self.controller.toggle_play)

        self.act_reset = QAction("Reset", self)
        self.act_reset.setShortcut("Ctrl+R")
        self.act_reset.triggered.connect(self.controller.reset)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        playback_menu = menu_bar.addMenu("&Playback")
        playback_menu.addAction(self.act_play)
        playback_menu.addAction(self.act_reset)

    # --- SLOTS ---

    def on_state_changed(self, snapshot: PlaybackSnapshot) -> None:
        """Redraw every view from one controller snapshot."""
        self.molecule_view.set_frame(get_frame(snapshot.t, snapshot.options))
        self.energy_diagram.set_progress(snapshot.progress)
        self.controls.sync(snapshot)

    def on_export_energy_diagram(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Energy Diagram", "energy_diagram.png",
            "PNG Image (*.png);;SVG Image (*.svg);;PDF Document (*.pdf)"
        )
        if not fname:
            return
        if not os.path.splitext(fname)[1]:
            fname += ".png"
        self.export_energy_diagram(fname)

    def export_energy_diagram(self, path: str) -> bool:
        """Render the energy profile with matplotlib and save it to ``path``."""
        try:
            fig = DEFAULT_PROFILE.plot()
            fig.savefig(path, dpi=150)
            logger.info(f"Energy diagram exported to {path}.")
            return True
        except Exception as e:
            logger.exception(f"Failed to export energy diagram to {path}.")
            QMessageBox.critical(self, "Error", f"Could not export the energy diagram:\n{e}")
            return False

    def closeEvent(self, event, /) -> None:
        """Stop every playback timer before the window goes away."""
        self.controller.shutdown()
        super().closeEvent(event)
