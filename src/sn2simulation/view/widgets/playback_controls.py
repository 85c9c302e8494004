import logging
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox, QFrame, QHBoxLayout, QLabel, QPushButton, QSlider, QStyle, QVBoxLayout, QWidget
)

from sn2simulation.config import MAX_PROGRESS, MIN_PROGRESS
from sn2simulation.controller.playback import PlaybackController, PlaybackSnapshot

logger = logging.getLogger(__name__)

SLIDER_STEPS_PER_UNIT = 10  # scrubber resolution of 0.1 progress


class CountdownBanner(QFrame):
    """Shown while playback holds at the transition state."""
    resume_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("countdownBanner")
        self.setStyleSheet(
            "#countdownBanner { background: #fffbeb; border: 1px solid #fde68a; border-radius: 8px; }"
        )

        layout = QHBoxLayout(self)
        text = QLabel("<b>Highest Energy Point</b><br/>Resuming automatically")
        text.setStyleSheet("color: #92400e;")
        layout.addWidget(text)
        layout.addStretch()

        self.lbl_countdown = QLabel()
        self.lbl_countdown.setStyleSheet("color: #b45309; font-size: 18pt; font-weight: bold;")
        layout.addWidget(self.lbl_countdown)

        self.btn_resume = QPushButton("Resume now")
        self.btn_resume.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaSeekForward))
        self.btn_resume.clicked.connect(self.resume_requested)
        layout.addWidget(self.btn_resume)

        self.setVisible(False)

    def set_countdown(self, seconds: Optional[int]) -> None:
        """``None`` hides the banner."""
        if seconds is None:
            self.setVisible(False)
            return
        self.lbl_countdown.setText(f"{seconds}s")
        self.setVisible(True)


class PlaybackControlPanel(QWidget):
    """
    Play/pause and reset buttons, the progress scrubber and the display toggles.

    The panel never keeps its own copy of the playback state: user input is
    forwarded to the controller and the widgets are re-synced from every
    snapshot the controller emits.
    """
    def __init__(self, controller: PlaybackController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- Countdown ---
        self.countdown_banner = CountdownBanner()
        self.countdown_banner.resume_requested.connect(self.controller.resume)
        layout.addWidget(self.countdown_banner)

        # --- Transport & Scrubber ---
        transport = QHBoxLayout()

        self.btn_play = QPushButton()
        self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
        self.btn_play.setToolTip("Play / Pause")
        self.btn_play.clicked.connect(self.controller.toggle_play)
        transport.addWidget(self.btn_play)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(int(MIN_PROGRESS * SLIDER_STEPS_PER_UNIT), int(MAX_PROGRESS * SLIDER_STEPS_PER_UNIT))
        self.slider.valueChanged.connect(self.on_slider_changed)
        transport.addWidget(self.slider, stretch=1)

        self.btn_reset = QPushButton()
        self.btn_reset.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload))
        self.btn_reset.setToolTip("Reset")
        self.btn_reset.clicked.connect(self.controller.reset)
        transport.addWidget(self.btn_reset)

        layout.addLayout(transport)

        # --- Scrubber labels ---
        labels = QHBoxLayout()
        for text, alignment in (
            ("Reactants", Qt.AlignmentFlag.AlignLeft),
            ("Transition State", Qt.AlignmentFlag.AlignHCenter),
            ("Products", Qt.AlignmentFlag.AlignRight),
        ):
            label = QLabel(text)
            label.setStyleSheet("color: #94a3b8; font-size: 8pt; font-weight: bold;")
            label.setAlignment(alignment)
            labels.addWidget(label, stretch=1)
        layout.addLayout(labels)

        # --- Toggles ---
        toggles = QHBoxLayout()
        self.chk_arrows = QCheckBox("Arrows")
        self.chk_arrows.toggled.connect(self.controller.set_show_arrows)
        toggles.addWidget(self.chk_arrows)

        self.chk_distances = QCheckBox("Distances && Orbitals")
        self.chk_distances.toggled.connect(self.controller.set_show_distances)
        toggles.addWidget(self.chk_distances)

        self.chk_auto_pause = QCheckBox("Auto-Pause")
        self.chk_auto_pause.setToolTip("Hold for a few seconds at the transition state")
        self.chk_auto_pause.toggled.connect(self.controller.set_auto_pause)
        toggles.addWidget(self.chk_auto_pause)
        toggles.addStretch()
        layout.addLayout(toggles)

        self.sync(self.controller.snapshot())

    def on_slider_changed(self, value: int) -> None:
        self.controller.seek(value / SLIDER_STEPS_PER_UNIT)

    def sync(self, snapshot: PlaybackSnapshot) -> None:
        """Mirror ``snapshot`` into the widgets without feeding it back."""
        widgets = (self.slider, self.chk_arrows, self.chk_distances, self.chk_auto_pause)
        for widget in widgets:
            widget.blockSignals(True)
        try:
            self.slider.setValue(int(round(snapshot.progress * SLIDER_STEPS_PER_UNIT)))
            self.chk_arrows.setChecked(snapshot.options.show_arrows)
            self.chk_distances.setChecked(snapshot.options.show_distances)
            self.chk_auto_pause.setChecked(snapshot.auto_pause)
        finally:
            for widget in widgets:
                widget.blockSignals(False)

        icon = QStyle.StandardPixmap.SP_MediaPause if snapshot.is_playing else QStyle.StandardPixmap.SP_MediaPlay
        self.btn_play.setIcon(self.style().standardIcon(icon))
        self.countdown_banner.set_countdown(snapshot.countdown)
